"""
Tests for the workflow controller state machine.
"""

import pytest

from core.asset_store import AssetStore
from core.errors import GENERIC_CONVERSION_MESSAGE, ConversionError, TransportError, UnsupportedTypeError
from core.models import ConversionResult, SelectedImage
from core.workflow import WorkflowController
from core.workflow_state import WorkflowState


@pytest.fixture
def notices():
    return []


_controllers: list[WorkflowController] = []


@pytest.fixture(autouse=True)
def _shutdown_controllers():
    yield
    while _controllers:
        _controllers.pop().shutdown()


def make_controller(client, notices):
    controller = WorkflowController(client, asset_store=AssetStore())
    controller.notice.connect(notices.append)
    _controllers.append(controller)
    return controller


def wait_for_state(qtbot, controller, state):
    qtbot.waitUntil(lambda: controller.state is state, timeout=5000)


class TestSelection:
    def test_initial_state(self, fake_client, notices):
        controller = make_controller(fake_client, notices)
        assert controller.state is WorkflowState.IDLE
        assert controller.selected_image is None
        assert controller.asset is None

    def test_select_image(self, qtbot, fake_client, notices, selected_image):
        controller = make_controller(fake_client, notices)

        with qtbot.waitSignal(controller.stateChanged) as blocker:
            assert controller.select_image(selected_image)

        assert blocker.args == [WorkflowState.IMAGE_SELECTED]
        assert controller.selected_image is selected_image
        assert fake_client.calls == []

    def test_rejected_file_leaves_state_untouched(self, fake_client, notices, selected_image):
        controller = make_controller(fake_client, notices)
        controller.select_image(selected_image)

        controller.reject_selection(UnsupportedTypeError("notes.txt is not an image"))

        assert controller.state is WorkflowState.IMAGE_SELECTED
        assert controller.selected_image is selected_image
        assert notices[-1].level == "warning"
        assert notices[-1].message == "notes.txt is not an image"

    def test_selection_ignored_while_converting(self, qtbot, blocking_client, notices, selected_image):
        controller = make_controller(blocking_client, notices)
        controller.select_image(selected_image)
        controller.convert()

        other = SelectedImage(data=b"png", mime_type="image/png", name="dog.png")
        assert not controller.select_image(other)

        assert controller.selected_image is selected_image
        assert controller.state is WorkflowState.CONVERTING
        assert notices[-1].title == "Conversion in progress"

        blocking_client.release()
        wait_for_state(qtbot, controller, WorkflowState.READY)
        controller.shutdown()

    def test_new_selection_releases_previous_model(self, qtbot, fake_client, notices, selected_image):
        controller = make_controller(fake_client, notices)
        controller.select_image(selected_image)
        controller.convert()
        wait_for_state(qtbot, controller, WorkflowState.READY)
        asset = controller.asset

        controller.select_image(SelectedImage(data=b"png", mime_type="image/png", name="dog.png"))

        assert asset.is_revoked
        assert controller.asset is None
        assert controller.state is WorkflowState.IMAGE_SELECTED


class TestConvert:
    def test_convert_without_image(self, fake_client, notices):
        controller = make_controller(fake_client, notices)

        assert not controller.convert()

        assert controller.state is WorkflowState.IDLE
        assert fake_client.calls == []
        assert notices[-1].level == "error"
        assert notices[-1].message == "Please upload an image first"

    def test_converting_before_response(self, qtbot, blocking_client, notices, selected_image):
        controller = make_controller(blocking_client, notices)
        controller.select_image(selected_image)

        assert controller.convert()

        assert controller.state is WorkflowState.CONVERTING
        assert controller.is_converting
        assert blocking_client.started.wait(5)
        assert blocking_client.calls == [selected_image]

        # A second convert while busy issues nothing
        assert not controller.convert()

        blocking_client.release()
        wait_for_state(qtbot, controller, WorkflowState.READY)
        assert len(blocking_client.calls) == 1

    def test_success(self, qtbot, make_client, notices, selected_image):
        result = ConversionResult(b"glTF" * 1000, "model/gltf-binary")
        controller = make_controller(make_client(result), notices)
        controller.select_image(selected_image)

        with qtbot.waitSignal(controller.assetChanged, timeout=5000) as blocker:
            controller.convert()

        wait_for_state(qtbot, controller, WorkflowState.READY)
        asset = blocker.args[0]
        assert asset is controller.asset
        assert asset.read() == result.data
        assert asset.suggested_filename == "model.glb"
        assert notices[-1].level == "success"
        assert notices[-1].message == "Your 3D model is ready"

    def test_each_attempt_gets_a_fresh_asset(self, qtbot, fake_client, notices, selected_image):
        controller = make_controller(fake_client, notices)
        controller.select_image(selected_image)

        controller.convert()
        wait_for_state(qtbot, controller, WorkflowState.READY)
        first = controller.asset

        controller.convert()
        wait_for_state(qtbot, controller, WorkflowState.READY)
        second = controller.asset

        assert first.url != second.url
        assert first.is_revoked
        assert not second.is_revoked
        assert len(controller.asset_store) == 1

    def test_server_error(self, qtbot, failing_client, notices, selected_image):
        controller = make_controller(failing_client, notices)
        controller.select_image(selected_image)
        controller.convert()

        wait_for_state(qtbot, controller, WorkflowState.FAILED)

        assert controller.error_message == "model overloaded"
        assert controller.asset is None
        assert notices[-1].level == "error"
        assert notices[-1].message == "model overloaded"

    def test_unparsable_error_uses_generic_message(self, qtbot, make_client, notices, selected_image):
        controller = make_controller(make_client(ConversionError()), notices)
        controller.select_image(selected_image)
        controller.convert()

        wait_for_state(qtbot, controller, WorkflowState.FAILED)
        assert controller.error_message == GENERIC_CONVERSION_MESSAGE

    def test_transport_error(self, qtbot, make_client, notices, selected_image):
        controller = make_controller(make_client(TransportError()), notices)
        controller.select_image(selected_image)
        controller.convert()

        wait_for_state(qtbot, controller, WorkflowState.FAILED)
        assert controller.error_message

    def test_retry_after_failure(self, qtbot, failing_client, notices, selected_image):
        controller = make_controller(failing_client, notices)
        controller.select_image(selected_image)
        controller.convert()
        wait_for_state(qtbot, controller, WorkflowState.FAILED)

        failing_client.outcome = ConversionResult(b"glb", "model/gltf-binary")
        assert controller.convert()

        wait_for_state(qtbot, controller, WorkflowState.READY)
        assert controller.error_message is None


class TestClear:
    @pytest.mark.parametrize("outcome", ["idle", "selected", "ready", "failed"])
    def test_clear_from_any_state(self, qtbot, make_client, notices, selected_image, outcome):
        client = make_client(ConversionError("nope") if outcome == "failed" else None)
        controller = make_controller(client, notices)
        if outcome != "idle":
            controller.select_image(selected_image)
        if outcome in ("ready", "failed"):
            controller.convert()
            wait_for_state(qtbot, controller, WorkflowState.READY if outcome == "ready" else WorkflowState.FAILED)
        asset = controller.asset

        controller.clear()

        assert controller.state is WorkflowState.IDLE
        assert controller.selected_image is None
        assert controller.asset is None
        assert controller.error_message is None
        if asset is not None:
            assert asset.is_revoked

    def test_clear_while_converting_discards_result(self, qtbot, blocking_client, notices, selected_image):
        controller = make_controller(blocking_client, notices)
        assets = []
        controller.assetChanged.connect(assets.append)
        controller.select_image(selected_image)
        controller.convert()
        assert blocking_client.started.wait(5)

        controller.clear()
        assert controller.state is WorkflowState.IDLE

        blocking_client.release()
        qtbot.wait(200)

        assert controller.state is WorkflowState.IDLE
        assert controller.asset is None
        assert assets == []
        assert len(controller.asset_store) == 0
        controller.shutdown()

    def test_shutdown_releases_everything(self, qtbot, fake_client, notices, selected_image):
        controller = make_controller(fake_client, notices)
        controller.select_image(selected_image)
        controller.convert()
        wait_for_state(qtbot, controller, WorkflowState.READY)
        asset = controller.asset

        controller.shutdown()

        assert asset.is_revoked
        assert len(controller.asset_store) == 0
