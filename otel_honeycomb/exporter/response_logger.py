"""Report failed deliveries from the libhoney response queue."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Any, Callable, Dict, Optional

from otel_honeycomb.errors import TransmissionError

logger = logging.getLogger("otel_honeycomb.exporter")

ErrorHook = Callable[[Exception], None]


def log_error(err: Exception) -> None:
    """Default error hook: log and carry on."""
    logger.warning("honeycomb export error: %s", err)


def response_error(response: Dict[str, Any]) -> Optional[TransmissionError]:
    """Return a TransmissionError for a failed libhoney response, else None."""
    status_code = response.get("status_code")
    error = response.get("error")
    if not error and (status_code is None or status_code < 400):
        return None
    return TransmissionError(
        str(error) if error else f"unexpected response status {status_code}",
        details={
            "status_code": status_code,
            "body": (response.get("body") or "").strip(),
            "metadata": response.get("metadata"),
        },
    )


class ResponseErrorLogger:
    """
    Drains a libhoney response queue on a background thread.

    Runs until the transmission puts its None sentinel on the queue
    (libhoney does this on close) or stop() is called.
    """

    def __init__(
        self,
        responses: "queue.Queue",
        on_error: Optional[ErrorHook] = None,
        *,
        poll_interval: float = 0.5,
    ) -> None:
        self.responses = responses
        self.on_error = on_error or log_error
        self.poll_interval = poll_interval
        self._stop = threading.Event()
        self._worker = threading.Thread(
            target=self._worker_loop, name="honeycomb-response-logger", daemon=True
        )

    def start(self) -> "ResponseErrorLogger":
        self._worker.start()
        return self

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._worker.is_alive():
            self._worker.join(timeout=timeout)

    def join(self, timeout: Optional[float] = None) -> None:
        self._worker.join(timeout=timeout)

    @property
    def running(self) -> bool:
        return self._worker.is_alive()

    # Internal
    def _worker_loop(self) -> None:
        while not self._stop.is_set():
            try:
                response = self.responses.get(timeout=self.poll_interval)
            except queue.Empty:
                continue
            if response is None:
                return
            err = response_error(response)
            if err is not None:
                self._report(err)

    def _report(self, err: TransmissionError) -> None:
        try:
            self.on_error(err)
        except Exception:
            logger.exception("error hook raised while reporting %s", err)
