"""Tests for the notification system."""

from unittest.mock import AsyncMock, patch

import pytest

from tempmon.lib.exceptions import (
    ConfigurationError,
    NotificationError,
    NotificationTimeoutError,
)
from tempmon.lib.notifications import MailNotifier, sanitize, validate_mail_command
from tests.conftest import make_executable


class TestSanitize:
    """Tests for command argument sanitization."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("plain subject", "plain subject"),
            ("a;b", "ab"),
            (";;;", ""),
            ("ops@example.com; rm -rf /", "ops@example.com rm -rf /"),
            ("", ""),
        ],
    )
    def test_removes_semicolons(self, value, expected):
        assert sanitize(value) == expected


class TestValidateMailCommand:
    """Tests for the startup mail command check."""

    def test_accepts_executable_file(self, mail_command):
        validate_mail_command(mail_command)

    @pytest.mark.parametrize("mode", [0o100, 0o010, 0o001])
    def test_accepts_any_executable_bit(self, tmp_path, mode):
        path = tmp_path / "mail"
        path.write_text("#!/bin/sh\n")
        path.chmod(0o600 | mode)

        validate_mail_command(path)

    def test_rejects_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="does not exist"):
            validate_mail_command(tmp_path / "missing")

    def test_rejects_directory(self, tmp_path):
        with pytest.raises(ConfigurationError, match="points to a directory"):
            validate_mail_command(tmp_path)

    def test_rejects_non_executable_file(self, tmp_path):
        path = tmp_path / "mail"
        path.write_text("#!/bin/sh\n")
        path.chmod(0o644)

        with pytest.raises(ConfigurationError, match="is not executable"):
            validate_mail_command(path)


class TestMailNotifier:
    """Tests for sending email through the mail command."""

    @pytest.mark.asyncio
    async def test_successful_send(self, settings, tmp_path, caplog):
        notifier = MailNotifier(settings)

        await notifier.send("CPU alert", "Current temp: 65.50°C")

        args = (tmp_path / "mail-args.txt").read_text().splitlines()
        assert args == ["-s", "CPU alert", "ops@example.com"]
        assert (tmp_path / "mail-body.txt").read_text(encoding="utf-8") == "Current temp: 65.50°C"
        assert "Email sent successfully to ops@example.com" in caplog.text

    @pytest.mark.asyncio
    async def test_semicolons_are_stripped(self, settings, tmp_path):
        settings = settings.model_copy(update={"recipient": "ops@example.com;evil"})
        notifier = MailNotifier(settings)

        await notifier.send("alert; touch /tmp/pwned;", "body")

        args = (tmp_path / "mail-args.txt").read_text().splitlines()
        assert args == ["-s", "alert touch /tmp/pwned", "ops@example.comevil"]

    @pytest.mark.asyncio
    async def test_no_recipient_is_a_noop(self, settings, caplog):
        settings = settings.model_copy(update={"recipient": "<none>"})
        notifier = MailNotifier(settings)

        with patch(
            "tempmon.lib.notifications.asyncio.create_subprocess_exec",
            new_callable=AsyncMock,
        ) as mock_exec:
            await notifier.send("subject", "body")

        mock_exec.assert_not_called()
        assert "Email recipient not set" in caplog.text

    @pytest.mark.asyncio
    async def test_non_zero_exit_raises_with_stderr(self, settings, tmp_path):
        failing = make_executable(
            tmp_path / "failing-mail",
            "#!/bin/sh\ncat > /dev/null\necho 'send-mail: cannot connect' >&2\nexit 1\n",
        )
        settings = settings.model_copy(update={"mail_command": failing})

        with pytest.raises(NotificationError) as exc_info:
            await MailNotifier(settings).send("subject", "body")

        assert not isinstance(exc_info.value, NotificationTimeoutError)
        assert "exited with status 1" in str(exc_info.value)
        assert "Stderr: send-mail: cannot connect" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_non_zero_exit_without_stderr(self, settings, tmp_path):
        failing = make_executable(tmp_path / "failing-mail", "#!/bin/sh\nexit 3\n")
        settings = settings.model_copy(update={"mail_command": failing})

        with pytest.raises(NotificationError) as exc_info:
            await MailNotifier(settings).send("subject", "body")

        assert "exited with status 3" in str(exc_info.value)
        assert "Stderr" not in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_spawn_failure_raises(self, settings, tmp_path):
        settings = settings.model_copy(update={"mail_command": tmp_path / "missing"})

        with pytest.raises(NotificationError, match="failed to send email"):
            await MailNotifier(settings).send("subject", "body")

    @pytest.mark.asyncio
    async def test_timeout_raises_timeout_error(self, settings, tmp_path, caplog):
        hanging = make_executable(tmp_path / "slow-mail", "#!/bin/sh\nexec sleep 30\n")
        settings = settings.model_copy(
            update={"mail_command": hanging, "mail_timeout_sec": 0.2}
        )

        with pytest.raises(NotificationTimeoutError, match="timed out after 0.2s"):
            await MailNotifier(settings).send("subject", "body")

        assert "Mail command timed out after 0.2s" in caplog.text

    @pytest.mark.asyncio
    async def test_timeout_kills_subprocess(self, settings):
        settings = settings.model_copy(update={"mail_timeout_sec": 0.01})
        proc = AsyncMock()
        proc.returncode = None
        proc.communicate.side_effect = TimeoutError
        proc.kill = lambda: setattr(proc, "returncode", -9)

        with patch(
            "tempmon.lib.notifications.asyncio.create_subprocess_exec",
            new=AsyncMock(return_value=proc),
        ):
            with pytest.raises(NotificationTimeoutError):
                await MailNotifier(settings).send("subject", "body")

        assert proc.returncode == -9
        proc.wait.assert_awaited_once()
