"""Tests for the server event log."""

from __future__ import annotations

import io
import ipaddress
import sys
import threading
from datetime import datetime

import pytest
from django.test import override_settings

from jamulus_rpc.config import reset_config
from jamulus_rpc.protocols import HostAddress
from jamulus_rpc.server_log import (
    LogCategory,
    LogRecord,
    ServerEventLog,
    sanitize_channel_name,
)
from jamulus_rpc.signals import channel_info_changed, client_connected, server_idle

FIXED_TIME = datetime(2006, 9, 30, 11, 38, 8)


def fixed_clock():
    return FIXED_TIME


@pytest.fixture
def console():
    return io.StringIO()


@pytest.fixture
def event_log(console):
    log = ServerEventLog(console=console, clock=fixed_clock)
    yield log
    log.close()


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "server.log"


def read_lines(path):
    with open(path, encoding="utf-8", newline="") as f:
        return f.read().split("\n")[:-1]


@pytest.mark.unit
class TestSanitizeChannelName:
    def test_escapes_and_flattens(self):
        assert (
            sanitize_channel_name('He said "hi"\tand\nbye\\now')
            == 'He said \\"hi\\" and bye\\\\now'
        )

    def test_carriage_return(self):
        assert sanitize_channel_name("a\r\nb") == "a  b"

    def test_plain_name_unchanged(self):
        assert sanitize_channel_name("Jane Doe") == "Jane Doe"


@pytest.mark.unit
class TestLogRecord:
    def test_format(self):
        record = LogRecord(FIXED_TIME, LogCategory.CONNECT, ("1.2.3.4:5", "x"))

        assert record.format() == "2006-09-30 11:38:08\tCONNECT\t1.2.3.4:5\tx"

    def test_format_without_fields(self):
        assert LogRecord(FIXED_TIME, LogCategory.IDLE).format() == (
            "2006-09-30 11:38:08\tIDLE"
        )


@pytest.mark.unit
class TestServerEventLog:
    """Test ServerEventLog class."""

    def test_console_only_before_start(self, event_log, console, tmp_path):
        event_log.add_new_connection("1.2.3.4:22134", 1)

        assert console.getvalue() == (
            "2006-09-30 11:38:08\tCONNECT\t1.2.3.4:22134\tconnected (1)\n"
        )
        assert event_log.enabled is False
        assert list(tmp_path.iterdir()) == []

    def test_default_console_is_stdout(self, capsys):
        log = ServerEventLog(clock=fixed_clock)

        log.add_server_stopped()

        assert capsys.readouterr().out == "2006-09-30 11:38:08\tIDLE\n"

    def test_writes_events_in_order(self, event_log, log_path):
        assert event_log.start(str(log_path)) is True
        address = HostAddress(ipaddress.ip_address("1.2.3.4"), 22134)

        event_log.add_new_connection(address, 3)
        event_log.add_channel_info_changed(address, 'Jane "JJ" Doe')
        event_log.add_server_stopped()

        assert read_lines(log_path) == [
            "2006-09-30 11:38:08\tCONNECT\t1.2.3.4:22134\tconnected (3)",
            '2006-09-30 11:38:08\tCHANNEL\t1.2.3.4:22134\tJane \\"JJ\\" Doe',
            "2006-09-30 11:38:08\tIDLE",
        ]

    def test_console_mirrors_file(self, event_log, console, log_path):
        event_log.start(str(log_path))

        event_log.add_server_stopped()

        assert console.getvalue() == "2006-09-30 11:38:08\tIDLE\n"
        assert read_lines(log_path) == ["2006-09-30 11:38:08\tIDLE"]

    def test_channel_change_skipped_when_disabled(self, event_log, console):
        event_log.add_channel_info_changed("1.2.3.4:22134", "Jane")

        assert console.getvalue() == ""

    def test_appends_to_existing_file(self, event_log, log_path):
        log_path.write_text("previous line\n", encoding="utf-8")

        event_log.start(str(log_path))
        event_log.add_server_stopped()

        assert read_lines(log_path) == ["previous line", "2006-09-30 11:38:08\tIDLE"]

    def test_open_failure(self, event_log, tmp_path, console):
        path = tmp_path / "missing" / "server.log"

        assert event_log.start(str(path)) is False
        assert event_log.enabled is False

        # Console output continues
        event_log.add_server_stopped()
        assert console.getvalue() == "2006-09-30 11:38:08\tIDLE\n"

    def test_restart_switches_file(self, event_log, tmp_path):
        first = tmp_path / "first.log"
        second = tmp_path / "second.log"

        event_log.start(str(first))
        event_log.add_new_connection("1.2.3.4:1", 1)
        event_log.start(str(second))
        event_log.add_server_stopped()

        assert read_lines(first) == [
            "2006-09-30 11:38:08\tCONNECT\t1.2.3.4:1\tconnected (1)"
        ]
        assert read_lines(second) == ["2006-09-30 11:38:08\tIDLE"]

    def test_default_file_name(self, event_log, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert event_log.start() is True
        event_log.add_server_stopped()
        event_log.close()

        assert read_lines(tmp_path / "Jamulussrvlog.txt") == [
            "2006-09-30 11:38:08\tIDLE"
        ]

    def test_file_name_from_settings(self, event_log, tmp_path):
        path = tmp_path / "configured.log"

        with override_settings(JAMULUS_RPC={"LOG_FILE": str(path)}):
            reset_config()
            assert event_log.start() is True
        event_log.add_server_stopped()

        assert read_lines(path) == ["2006-09-30 11:38:08\tIDLE"]

    def test_missing_stdout_still_writes_file(self, log_path, monkeypatch):
        monkeypatch.setattr(sys, "stdout", None)
        log = ServerEventLog(clock=fixed_clock)
        log.start(str(log_path))

        log.add_new_connection("1.2.3.4:22134", 1)
        log.add_channel_info_changed("1.2.3.4:22134", "Bob")
        log.add_server_stopped()
        log.close()

        assert read_lines(log_path) == [
            "2006-09-30 11:38:08\tCONNECT\t1.2.3.4:22134\tconnected (1)",
            "2006-09-30 11:38:08\tCHANNEL\t1.2.3.4:22134\tBob",
            "2006-09-30 11:38:08\tIDLE",
        ]

    def test_channel_change_after_close_prints_nothing(
        self, event_log, console, log_path, monkeypatch
    ):
        """Should re-check the file under the lock, not only the fast path."""
        event_log.start(str(log_path))
        event_log.close()
        # The unlocked check saw an open file just before close() ran
        monkeypatch.setattr(ServerEventLog, "enabled", property(lambda self: True))

        event_log.add_channel_info_changed("1.2.3.4:22134", "Bob")

        assert console.getvalue() == ""
        assert read_lines(log_path) == []

    def test_close_is_idempotent(self, event_log, log_path):
        event_log.start(str(log_path))

        event_log.close()
        event_log.close()

        assert event_log.enabled is False

    def test_context_manager_closes(self, console, log_path):
        with ServerEventLog(console=console, clock=fixed_clock) as log:
            log.start(str(log_path))
            assert log.enabled

        assert log.enabled is False

    def test_non_ascii_name(self, event_log, log_path):
        event_log.start(str(log_path))

        event_log.add_channel_info_changed("1.2.3.4:1", "Zoë 🎸")

        assert read_lines(log_path)[0].endswith("\tZoë 🎸")

    def test_concurrent_writes_do_not_interleave(self, log_path):
        log = ServerEventLog(console=io.StringIO(), clock=fixed_clock)
        log.start(str(log_path))

        def worker(n):
            for i in range(50):
                log.add_new_connection(f"10.0.{n}.{i}:22134", i)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        log.close()

        lines = read_lines(log_path)
        assert len(lines) == 400
        for line in lines:
            timestamp, category, address, message = line.split("\t")
            assert timestamp == "2006-09-30 11:38:08"
            assert category == "CONNECT"
            assert message.startswith("connected (")


@pytest.mark.unit
class TestServerEventLogSignals:
    """Test the signal receivers."""

    def test_signals_are_recorded(self, event_log, log_path):
        event_log.start(str(log_path))
        event_log.connect_signals()
        try:
            client_connected.send(
                sender=None, address="1.2.3.4:22134", connected_clients=2
            )
            channel_info_changed.send(sender=None, address="1.2.3.4:22134", name="Bob")
            server_idle.send(sender=None)
        finally:
            event_log.disconnect_signals()

        assert read_lines(log_path) == [
            "2006-09-30 11:38:08\tCONNECT\t1.2.3.4:22134\tconnected (2)",
            "2006-09-30 11:38:08\tCHANNEL\t1.2.3.4:22134\tBob",
            "2006-09-30 11:38:08\tIDLE",
        ]

    def test_disconnected_log_ignores_signals(self, event_log, console):
        event_log.connect_signals()
        event_log.disconnect_signals()

        server_idle.send(sender=None)

        assert console.getvalue() == ""
