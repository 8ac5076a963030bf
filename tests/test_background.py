from __future__ import annotations

import pytest

pytest.importorskip("PySide6.QtWidgets")

import requests  # noqa: E402

from areto.client.api_client import ApiError  # noqa: E402
from areto.ui.background import BackgroundCall  # noqa: E402


def _collect(call: BackgroundCall) -> tuple[list, list]:
    succeeded: list = []
    failed: list = []
    call.signals.succeeded.connect(succeeded.append)
    call.signals.failed.connect(failed.append)
    return succeeded, failed


def test_result_is_reported_as_success():
    call = BackgroundCall(lambda a, b: a + b, 2, 3)
    succeeded, failed = _collect(call)

    call.run()

    assert succeeded == [5]
    assert failed == []


@pytest.mark.parametrize(
    "error",
    [ApiError(404, "Quiz not found"), requests.ConnectionError("refused")],
)
def test_request_failures_are_reported(error):
    def failing():
        raise error

    call = BackgroundCall(failing)
    succeeded, failed = _collect(call)

    call.run()

    assert succeeded == []
    assert failed == [error]


def test_unexpected_errors_are_logged_and_reported(caplog):
    def broken():
        raise ValueError("bad payload")

    call = BackgroundCall(broken)
    succeeded, failed = _collect(call)

    call.run()

    assert succeeded == []
    assert isinstance(failed[0], ValueError)
    assert "Background call broken failed" in caplog.text
