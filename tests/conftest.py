"""Shared pytest fixtures for the test suite."""

import logging
import os
from datetime import timedelta

import pytest

from tempmon.lib.config import Settings

_MAIL_SCRIPT = """#!/bin/sh
dir="$(dirname "$0")"
printf '%s\\n' "$@" > "$dir/mail-args.txt"
cat > "$dir/mail-body.txt"
"""


@pytest.fixture(autouse=True)
def configure_caplog(caplog):
    """Ensure caplog captures logs from the tempmon namespace."""
    caplog.set_level(logging.INFO, logger="tempmon")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from TEMPMON_* variables and any local .env file."""
    for key in list(os.environ):
        if key.startswith("TEMPMON_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


def make_executable(path, content: str):
    """Write a shell script and mark it executable."""
    path.write_text(content)
    path.chmod(0o755)
    return path


@pytest.fixture
def sensor_file(tmp_path):
    """A thermal zone file reporting 42°C."""
    path = tmp_path / "temp"
    path.write_text("42000\n")
    return path


@pytest.fixture
def mail_command(tmp_path):
    """A fake mail command that records its arguments and stdin."""
    return make_executable(tmp_path / "mail", _MAIL_SCRIPT)


@pytest.fixture
def settings(sensor_file, mail_command):
    """Settings wired to the fake sensor and mail command."""
    return Settings(
        recipient="ops@example.com",
        threshold=60.0,
        interval=timedelta(milliseconds=10),
        hostname="raspi",
        sensor_path=sensor_file,
        mail_command=mail_command,
    )
