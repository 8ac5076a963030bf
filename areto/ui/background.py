"""Run blocking API calls on the Qt thread pool and report back on the GUI thread."""

from __future__ import annotations

import logging
from typing import Any, Callable

import requests
from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from areto.client.api_client import ApiError

logger = logging.getLogger(__name__)


class _CallSignals(QObject):
    succeeded = Signal(object)
    failed = Signal(object)


class BackgroundCall(QRunnable):
    """Runs ``fn(*args)`` on a worker thread.

    The signals object is created on the calling (GUI) thread, so slots
    connected to it run there through queued delivery.
    """

    def __init__(self, fn: Callable[..., Any], *args: Any) -> None:
        super().__init__()
        self.setAutoDelete(False)
        self._fn = fn
        self._args = args
        self.signals = _CallSignals()

    def run(self) -> None:
        try:
            result = self._fn(*self._args)
        except (ApiError, requests.RequestException) as exc:
            self.signals.failed.emit(exc)
            return
        except Exception as exc:
            logger.exception("Background call %s failed", getattr(self._fn, "__name__", self._fn))
            self.signals.failed.emit(exc)
            return
        self.signals.succeeded.emit(result)


def run_in_background(
    fn: Callable[..., Any],
    *args: Any,
    on_success: Callable[[Any], None],
    on_error: Callable[[Exception], None],
) -> BackgroundCall:
    """Start ``fn(*args)`` on the global pool; keep the returned call referenced until it reports."""
    call = BackgroundCall(fn, *args)
    call.signals.succeeded.connect(on_success)
    call.signals.failed.connect(on_error)
    QThreadPool.globalInstance().start(call)
    return call
