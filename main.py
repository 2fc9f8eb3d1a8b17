"""minicron entrypoint -- wires config, job list, launcher and scheduler.

Usage:
    python main.py
    python main.py /path/to/crontab
    python main.py --config /path/to/config.yaml --once
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from core.config import load_config
from scheduler.clock import resolve_timezone
from scheduler.jobs import JobList
from scheduler.launcher import ProcessLauncher
from scheduler.runner import Scheduler


def setup_logging(level: str) -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run commands from a crontab-style job list")
    parser.add_argument(
        "jobs_file",
        nargs="?",
        default=None,
        help="Job list to read every minute (default: scheduler.jobs_file or ~/.minicron/crontab)",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to config.yaml (default: ~/.minicron/config.yaml)",
    )
    parser.add_argument(
        "--env",
        type=str,
        default=None,
        help="Path to .env file (default: ~/.minicron/.env)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override logging.level from config (DEBUG, INFO, ...)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single pass, wait for launched jobs, then exit",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> None:
    """Initialize all components and run the scheduler."""
    config = load_config(config_path=args.config, env_path=args.env)
    setup_logging(args.log_level or config.logging.level)
    logger = logging.getLogger("minicron")

    if args.jobs_file:
        config.scheduler.jobs_file = args.jobs_file

    jobs = JobList(config.jobs_path)
    launcher = ProcessLauncher(
        working_dir=config.launcher.working_dir,
        env=config.launcher.env,
        capture_output=config.launcher.capture_output,
    )
    scheduler = Scheduler(
        jobs=jobs,
        launcher=launcher,
        tz=resolve_timezone(config.scheduler.timezone),
        dispatch=config.scheduler.dispatch,
    )

    if args.once:
        dispatched = await scheduler.run_once()
        await launcher.drain()
        logger.info("Single pass done, %d job(s) dispatched", len(dispatched))
        return

    await scheduler.start()
    try:
        await scheduler.wait()
    except asyncio.CancelledError:
        pass
    finally:
        logger.info("Shutting down...")
        await scheduler.stop()
        if launcher.running:
            logger.info("Killing %d job(s) still running", launcher.running)
            await launcher.shutdown()


def main() -> None:
    args = parse_args()
    setup_logging(args.log_level or "INFO")
    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
