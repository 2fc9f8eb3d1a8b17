"""Tests for the job list reader."""

from __future__ import annotations

import logging

import pytest

from scheduler.jobs import JobList


def test_reads_job_lines_with_numbers(write_jobs):
    path = write_jobs(
        "# nightly jobs",
        "0 2 * * * backup",
        "",
        "   ",
        "  */5 * * * * ping host  ",
        "   # indented comment",
    )
    assert JobList(path).read() == [(2, "0 2 * * * backup"), (5, "*/5 * * * * ping host")]


def test_picks_up_edits_between_reads(write_jobs):
    path = write_jobs("* * * * * first")
    jobs = JobList(path)
    assert [line for _, line in jobs.read()] == ["* * * * * first"]

    path.write_text("* * * * * second\n* * * * * third\n", encoding="utf-8")
    assert [line for _, line in jobs.read()] == ["* * * * * second", "* * * * * third"]


def test_empty_file(write_jobs):
    assert JobList(write_jobs()).read() == []


def test_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        JobList(tmp_path / "nope").read()


def test_expands_user(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    (tmp_path / "crontab").write_text("* * * * * x\n", encoding="utf-8")
    jobs = JobList("~/crontab")
    assert jobs.path == tmp_path / "crontab"
    assert len(jobs.read()) == 1


def test_invalid_utf8_line_is_skipped(tmp_path, caplog):
    path = tmp_path / "crontab"
    path.write_bytes(b"* * * * * one\n\xff\xfe * * * * two\r\n* * * * * caf\xc3\xa9\n")
    with caplog.at_level(logging.WARNING, logger="scheduler.jobs"):
        entries = JobList(path).read()
    assert entries == [(1, "* * * * * one"), (3, "* * * * * café")]
    assert "Skipping line 2" in caplog.text
