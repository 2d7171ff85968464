"""
Workflow controller for the upload, convert, preview and download cycle.

The controller is the single owner of the workflow state. Every mutation
happens on the UI thread: user actions call its methods directly and the
conversion outcome arrives through queued signals from the worker thread.

    IDLE ──select──▶ IMAGE_SELECTED ──convert──▶ CONVERTING ──success──▶ READY
                                                     │
                                                     └──failure──▶ FAILED ──convert──▶ CONVERTING

    any state ──clear──▶ IDLE
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal, Slot

from .asset_store import AssetStore, ModelAsset
from .conversion_client import ConversionClient
from .errors import BaseAppError, MissingInputError, UnsupportedTypeError
from .models import ConversionResult, Notice, SelectedImage
from .threading import ConversionRunner
from .workflow_state import WorkflowState

logger = logging.getLogger(__name__)


class WorkflowController(QObject):
    """
    Owns the workflow state machine and mediates between its collaborators.

    Signals:
        stateChanged(WorkflowState): the state after every transition
        imageChanged(object): the current SelectedImage, or None
        assetChanged(object): the current ModelAsset, or None
        notice(object): a Notice to show to the user
    """

    stateChanged = Signal(object)
    imageChanged = Signal(object)
    assetChanged = Signal(object)
    notice = Signal(object)

    def __init__(
        self,
        client: ConversionClient,
        asset_store: AssetStore | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.asset_store = asset_store if asset_store is not None else AssetStore()

        self._state = WorkflowState.IDLE
        self._image: SelectedImage | None = None
        self._asset: ModelAsset | None = None
        self._error_message: str | None = None

        # Results from any attempt other than the current one are discarded
        self._attempt = 0

        self.runner = ConversionRunner(client, parent=self)
        self.runner.conversionCompleted.connect(self._on_conversion_completed)
        self.runner.conversionFailed.connect(self._on_conversion_failed)

        self.setObjectName("WorkflowController")

    # Read-only views of the state

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def selected_image(self) -> SelectedImage | None:
        return self._image

    @property
    def asset(self) -> ModelAsset | None:
        """The model asset; only set in READY."""
        return self._asset

    @property
    def error_message(self) -> str | None:
        """The failure reason; only set in FAILED."""
        return self._error_message

    @property
    def is_converting(self) -> bool:
        return self._state is WorkflowState.CONVERTING

    # User actions

    @Slot(object)
    def select_image(self, image: SelectedImage) -> bool:
        """
        Make ``image`` the current selection.

        Any previous result is released. Ignored while a conversion is running.

        Returns:
            True if the selection was applied
        """
        if not self._state.accepts_selection:
            logger.warning(f"Ignoring selection of {image.name}: a conversion is in progress")
            self._notify("warning", "Conversion in progress", "Please wait for the current conversion to finish")
            return False

        logger.info(f"Image selected: {image.name} ({image.mime_type}, {image.size} bytes)")
        self._release_asset()
        self._error_message = None
        self._image = image
        self.imageChanged.emit(image)
        self._set_state(WorkflowState.IMAGE_SELECTED)
        return True

    @Slot(object)
    def reject_selection(self, error: UnsupportedTypeError) -> None:
        """Report a rejected file; the state is left untouched."""
        logger.warning(f"File rejected: {error.user_message}")
        self._notify("warning", "Unsupported file", error.user_message)

    @Slot()
    def convert(self) -> bool:
        """
        Start converting the selected image.

        Returns:
            True if a request was issued
        """
        if self._image is None:
            error = MissingInputError()
            logger.info("Convert requested without an image")
            self._notify("error", "No image selected", error.user_message)
            return False

        if not self._state.can_convert:
            logger.warning(f"Ignoring convert request in state {self._state.name}")
            return False

        self._release_asset()
        self._error_message = None
        self._attempt += 1
        attempt = self._attempt

        # Enter CONVERTING before the request is issued
        self._set_state(WorkflowState.CONVERTING)
        self.runner.start(self._image, attempt)
        return True

    @Slot()
    def clear(self) -> None:
        """Return to IDLE, dropping the image and releasing any result."""
        if self.is_converting:
            logger.info("Clearing during conversion; the pending result will be discarded")
            self._attempt += 1
            self.runner.detach()

        self._release_asset()
        self._error_message = None
        if self._image is not None:
            self._image = None
            self.imageChanged.emit(None)
        self._set_state(WorkflowState.IDLE)

    def shutdown(self, timeout_ms: int = 3000) -> None:
        """
        Release every resource held by the workflow.

        Called when the owning window goes away; any in-flight result is discarded.
        A request still running after ``timeout_ms`` is abandoned, not awaited.
        """
        self._attempt += 1
        self.runner.shutdown(timeout_ms)
        self._asset = None
        released = self.asset_store.revoke_all()
        logger.info(f"Workflow shut down ({released} asset(s) released)")

    # Conversion outcome

    @Slot(int, object)
    def _on_conversion_completed(self, attempt: int, result: ConversionResult) -> None:
        if not self._is_current(attempt):
            return

        asset = self.asset_store.create(result)
        self._asset = asset
        self.assetChanged.emit(asset)
        self._set_state(WorkflowState.READY)
        self._notify("success", "Success!", "Your 3D model is ready")

    @Slot(int, object)
    def _on_conversion_failed(self, attempt: int, error: BaseAppError) -> None:
        if not self._is_current(attempt):
            return
        self._fail(error.user_message)

    # Internals

    def _is_current(self, attempt: int) -> bool:
        if attempt != self._attempt or not self.is_converting:
            logger.info(f"Discarding result of superseded conversion attempt {attempt}")
            return False
        return True

    def _fail(self, message: str) -> None:
        self._error_message = message
        self._set_state(WorkflowState.FAILED)
        self._notify("error", "Conversion failed", message)

    def _release_asset(self) -> None:
        if self._asset is None:
            return
        asset, self._asset = self._asset, None
        asset.revoke()
        self.assetChanged.emit(None)

    def _set_state(self, state: WorkflowState) -> None:
        if state is self._state:
            return
        logger.debug(f"Workflow state {self._state.name} -> {state.name}")
        self._state = state
        self.stateChanged.emit(state)

    def _notify(self, level: str, title: str, message: str) -> None:
        self.notice.emit(Notice(level, title, message))
