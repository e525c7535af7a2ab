"""Human readable scan log sink."""

import logging
from typing import Optional

from rich.console import Console

from .base import AppendSink

LOG_FORMAT = "[%(asctime)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
WARN_PREFIX = "WARN: "


class LogSink(AppendSink):
    """Timestamped scan log, echoed to the console.

    Lines go through a dedicated logger with a FileHandler, which flushes on
    every record. Console echo is untimestamped; warnings go to stderr.
    """

    def __init__(
        self,
        path,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        super().__init__(path)
        self.console = console
        self.err_console = err_console
        self._logger = logging.getLogger(f"hostscan.report.{self.path.stem}")
        self._handler: Optional[logging.Handler] = None

    def open(self):
        handler = logging.FileHandler(self.path, mode="a", encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

        for stale in list(self._logger.handlers):
            self._logger.removeHandler(stale)
            stale.close()

        self._logger.addHandler(handler)
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False
        self._handler = handler
        self._closed = False
        return self

    def close(self):
        if self._handler is not None:
            self._logger.removeHandler(self._handler)
            self._handler.close()
            self._handler = None
        self._closed = True

    def write_line(self, message: str):
        self._ensure_open()
        self._logger.info(message)
        if self.console is not None:
            self.console.print(message, markup=False, highlight=False, soft_wrap=True)

    def write_warning(self, message: str):
        self._ensure_open()
        line = WARN_PREFIX + message
        self._logger.warning(line)
        if self.err_console is not None:
            self.err_console.print(
                line, style="yellow", markup=False, highlight=False, soft_wrap=True
            )
