"""
Threading system for non-blocking conversion requests.

This module provides a worker that runs the conversion request off the UI
thread, and a runner that manages the worker lifecycle. Results are
delivered back to the UI thread through queued signals.

The request runs on a daemon thread rather than a QThread. A request can
outlive the window that issued it (the service may take minutes), and a
daemon thread neither blocks interpreter exit nor aborts the process when
the Qt object tree is torn down around it.
"""

from __future__ import annotations

import logging
import threading

from PySide6.QtCore import QObject, Qt, Signal, Slot

from .conversion_client import ConversionClient
from .errors import map_exception
from .models import SelectedImage

logger = logging.getLogger(__name__)


class ConversionWorker(QObject):
    """
    Worker running one conversion request on its own daemon thread.

    Emits exactly one terminal signal per run, followed by ``finished``.
    The worker has no Qt parent: the running thread keeps it alive until
    the request returns, whoever else lets go of it.

    Signals:
        conversionCompleted(int, object): attempt number and ConversionResult
        conversionFailed(int, object): attempt number and BaseAppError
        finished(): the request returned, successfully or not
    """

    conversionCompleted = Signal(int, object)
    conversionFailed = Signal(int, object)
    finished = Signal()

    def __init__(self, client: ConversionClient, image: SelectedImage, attempt: int) -> None:
        super().__init__()
        self.client = client
        self.image = image
        self.attempt = attempt
        self.setObjectName(f"ConversionWorker-{attempt}")
        self._thread = threading.Thread(target=self.run, name=self.objectName(), daemon=True)

    def start(self) -> None:
        self._thread.start()

    def is_running(self) -> bool:
        return self._thread.is_alive()

    def wait(self, timeout_ms: int | None = None) -> bool:
        """
        Block until the request returns.

        Returns:
            True if the thread finished within ``timeout_ms``
        """
        timeout = None if timeout_ms is None else timeout_ms / 1000
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def run(self) -> None:
        """
        Main worker thread execution.

        Runs the request and maps every exception to an application error so
        the UI always receives a terminal signal.
        """
        try:
            result = self.client.convert(self.image)
        except Exception as e:
            error = map_exception(e, {"image": self.image.name})
            # Thread-safe logging without traceback formatting
            logger.error(f"Conversion attempt {self.attempt} failed: {error.code.value}")
            self.conversionFailed.emit(self.attempt, error)
        else:
            logger.info(f"Conversion attempt {self.attempt} completed")
            self.conversionCompleted.emit(self.attempt, result)
        finally:
            self.finished.emit()


class ConversionRunner(QObject):
    """
    Manages the lifecycle of ConversionWorker threads.

    Only one worker is current at a time. A worker superseded by
    :meth:`detach` is left to finish on its own and its signals no longer
    reach the runner.
    """

    conversionCompleted = Signal(int, object)
    conversionFailed = Signal(int, object)

    def __init__(self, client: ConversionClient, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.client = client
        self.current_worker: ConversionWorker | None = None
        self._orphans: list[ConversionWorker] = []
        self.setObjectName("ConversionRunner")

    def start(self, image: SelectedImage, attempt: int) -> None:
        """
        Start a conversion of ``image`` on a new worker thread.

        A previous worker that has not been cleaned up yet is detached first;
        callers are responsible for not starting overlapping conversions.
        """
        if self.current_worker is not None:
            if self.current_worker.is_running():
                logger.warning("Starting a conversion while another worker is still running")
            self.detach()

        worker = ConversionWorker(self.client, image, attempt)
        worker.conversionCompleted.connect(self.conversionCompleted, Qt.ConnectionType.QueuedConnection)
        worker.conversionFailed.connect(self.conversionFailed, Qt.ConnectionType.QueuedConnection)
        worker.finished.connect(self._cleanup_worker, Qt.ConnectionType.QueuedConnection)
        self.current_worker = worker

        logger.info(f"Started conversion worker {worker.objectName()}")
        worker.start()

    def detach(self) -> None:
        """
        Stop listening to the current worker without interrupting it.

        The request is not aborted; its result is simply never delivered.
        """
        worker = self.current_worker
        if worker is None:
            return

        self.current_worker = None
        self._disconnect(worker)
        if worker.is_running():
            logger.info(f"Detached running worker {worker.objectName()}; its result will be discarded")
            self._orphans.append(worker)
            worker.finished.connect(self._reap_orphans, Qt.ConnectionType.QueuedConnection)

    @Slot()
    def _cleanup_worker(self) -> None:
        """Release the current worker once its thread has finished."""
        worker = self.current_worker
        if worker is None or worker.is_running():
            return

        self.current_worker = None
        self._disconnect(worker)
        logger.debug(f"Worker {worker.objectName()} released")

    @Slot()
    def _reap_orphans(self) -> None:
        """Release detached workers whose threads have finished."""
        for worker in [w for w in self._orphans if not w.is_running()]:
            self._orphans.remove(worker)
            logger.debug(f"Detached worker {worker.objectName()} finished and was released")

    def _disconnect(self, worker: ConversionWorker) -> None:
        # Late emissions from a finished or detached worker must not reach the UI
        try:
            worker.conversionCompleted.disconnect(self.conversionCompleted)
            worker.conversionFailed.disconnect(self.conversionFailed)
            worker.finished.disconnect(self._cleanup_worker)
        except (RuntimeError, TypeError):
            logger.debug("Signals already disconnected or worker deleted.")

    def shutdown(self, timeout_ms: int = 3000) -> None:
        """
        Detach the current worker and give running workers a chance to finish.

        Called when the application is about to quit. Workers still running
        after ``timeout_ms`` are abandoned; their daemon threads end with the
        process and their results are discarded.
        """
        self.detach()
        for worker in list(self._orphans):
            if not worker.wait(timeout_ms):
                logger.warning(f"Worker {worker.objectName()} did not finish within {timeout_ms}ms during shutdown")
