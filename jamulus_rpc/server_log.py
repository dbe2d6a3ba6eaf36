"""Server event log.

Connection lifecycle and channel changes are written as tab-separated lines
to an append-only text file and mirrored to the console::

    2006-09-30 11:38:08	CONNECT	1.2.3.4:22134	connected (3)
    2006-09-30 11:52:41	CHANNEL	1.2.3.4:22134	Jane \\"JJ\\" Doe
    2006-09-30 12:10:02	IDLE

Downstream scripts parse these lines, so the format must stay byte-stable.
File output starts only after :meth:`ServerEventLog.start`. Errors opening or
writing the file are logged and otherwise ignored; they never reach the
server code that reported the event.
"""

from __future__ import annotations

import logging
import sys
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, TextIO

from jamulus_rpc import logs
from jamulus_rpc.config import get_config
from jamulus_rpc.signals import channel_info_changed, client_connected, server_idle

logger = logging.getLogger("jamulus_rpc.events")

DEFAULT_LOG_FILE_NAME = "Jamulussrvlog.txt"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogCategory(str, Enum):
    CONNECT = "CONNECT"
    IDLE = "IDLE"
    CHANNEL = "CHANNEL"


@dataclass(frozen=True)
class LogRecord:
    """One line of the server event log.

    Attributes
    ----------
    timestamp : datetime
        Local time of the event.
    category : LogCategory
        Event category.
    fields : tuple[str, ...]
        Category-specific columns, already free of tabs and newlines.
    """

    timestamp: datetime
    category: LogCategory
    fields: tuple[str, ...] = ()

    def format(self) -> str:
        """Render the record without a trailing newline."""
        columns = [self.timestamp.strftime(TIMESTAMP_FORMAT), self.category.value]
        columns.extend(self.fields)
        return "\t".join(columns)


def sanitize_channel_name(name: str) -> str:
    """Make a channel name safe for a single tab-separated column.

    Line breaks and tabs become spaces, then backslashes and double quotes
    are escaped. Backslashes go first so the ones added for quotes are not
    doubled.

    Examples
    --------
    >>> sanitize_channel_name('He said "hi"\\tand\\nbye')
    'He said \\\\"hi\\\\" and bye'
    """
    for char in ("\n", "\r", "\t"):
        name = name.replace(char, " ")
    name = name.replace("\\", "\\\\")
    return name.replace('"', '\\"')


class ServerEventLog:
    """Thread-safe writer for the server event log.

    Parameters
    ----------
    console : TextIO | None, optional
        Stream receiving the console copy of each record. None means
        ``sys.stdout`` as it is at write time.
    clock : Callable[[], datetime], optional
        Source of local timestamps, by default :meth:`datetime.now`.

    Examples
    --------
    ::

        event_log = ServerEventLog()
        event_log.start("/var/log/jamulus/server.log")
        event_log.add_new_connection("1.2.3.4:22134", 1)
        ...
        event_log.close()
    """

    def __init__(
        self,
        console: TextIO | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._console = console
        self._clock = clock
        self._file: TextIO | None = None
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        """Whether records are written to the log file."""
        return self._file is not None

    def start(self, path: str | None = None) -> bool:
        """Open the log file in append mode.

        Calling it again switches to the new file. If the file cannot be
        opened, file logging stays disabled.

        Parameters
        ----------
        path : str | None, optional
            Log file path. Defaults to the ``LOG_FILE`` setting, then to
            :data:`DEFAULT_LOG_FILE_NAME`.

        Returns
        -------
        bool
            True if file logging is now enabled.
        """
        path = path or get_config().log_file or DEFAULT_LOG_FILE_NAME
        with self._lock:
            self._close_file()
            try:
                self._file = open(  # noqa: SIM115
                    path, "a", encoding="utf-8", newline="\n"
                )
            except OSError as e:
                logger.warning(logs.LOG_FILE_OPEN_FAILED, path, e)
                return False
        logger.info(logs.LOG_FILE_OPENED, path)
        return True

    def close(self) -> None:
        """Close the log file. Safe to call more than once."""
        with self._lock:
            self._close_file()

    def _close_file(self) -> None:
        if self._file is None:
            return
        try:
            self._file.close()
        except OSError as e:
            logger.warning(logs.LOG_FILE_WRITE_FAILED, e)
        self._file = None

    def __enter__(self) -> ServerEventLog:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def add_new_connection(self, address: Any, connected_clients: int) -> None:
        """Record a new client connection.

        Parameters
        ----------
        address : HostAddress | str
            Client address, rendered as ``ip:port``.
        connected_clients : int
            Number of connected clients including the new one.
        """
        self._emit(
            LogCategory.CONNECT, str(address), f"connected ({connected_clients})"
        )

    def add_server_stopped(self) -> None:
        """Record that the last client has left and the server is idle."""
        self._emit(LogCategory.IDLE)

    def add_channel_info_changed(self, address: Any, name: str) -> None:
        """Record a channel name or profile change.

        Channel updates are frequent, so nothing is formatted or printed
        unless file logging is enabled.
        """
        if not self.enabled:
            return
        self._emit(
            LogCategory.CHANNEL,
            str(address),
            sanitize_channel_name(name),
            requires_file=True,
        )

    def _emit(
        self, category: LogCategory, *fields: str, requires_file: bool = False
    ) -> None:
        with self._lock:
            # Checked again under the lock; close() may have run meanwhile
            if requires_file and self._file is None:
                return
            record = LogRecord(self._clock(), category, fields)
            line = record.format()

            # sys.stdout is None under pythonw and in detached daemons
            console = self._console if self._console is not None else sys.stdout
            if console is not None:
                try:
                    console.write(line + "\n")
                    console.flush()
                except (OSError, ValueError) as e:
                    logger.debug("Could not write to console: %s", e)

            if self._file is None:
                return
            try:
                self._file.write(line + "\n")
                self._file.flush()
            except (OSError, ValueError) as e:
                logger.warning(logs.LOG_FILE_WRITE_FAILED, e)

    # Signal receivers

    def _on_client_connected(
        self, sender: Any, address: Any, connected_clients: int, **kwargs: Any
    ) -> None:
        self.add_new_connection(address, connected_clients)

    def _on_server_idle(self, sender: Any, **kwargs: Any) -> None:
        self.add_server_stopped()

    def _on_channel_info_changed(
        self, sender: Any, address: Any, name: str, **kwargs: Any
    ) -> None:
        self.add_channel_info_changed(address, name)

    def connect_signals(self) -> None:
        """Listen to the server lifecycle signals."""
        client_connected.connect(self._on_client_connected, weak=False)
        server_idle.connect(self._on_server_idle, weak=False)
        channel_info_changed.connect(self._on_channel_info_changed, weak=False)

    def disconnect_signals(self) -> None:
        client_connected.disconnect(self._on_client_connected)
        server_idle.disconnect(self._on_server_idle)
        channel_info_changed.disconnect(self._on_channel_info_changed)
