"""
Shared fixtures for the test suite.
"""

import os
import threading
from pathlib import Path

import pytest

# Set offscreen platform to prevent display errors on headless systems
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QCoreApplication, Qt  # noqa: E402

# The web view shares GL contexts; must be set before any QApplication exists
QCoreApplication.setAttribute(Qt.ApplicationAttribute.AA_ShareOpenGLContexts)

from core.config_manager import ServiceConfig  # noqa: E402
from core.errors import ConversionError  # noqa: E402
from core.models import ConversionResult, SelectedImage  # noqa: E402

JPEG_HEADER = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00"


@pytest.fixture
def service_config() -> ServiceConfig:
    return ServiceConfig(endpoint="https://convert.example.com/v1/models", api_key="sk-test-123")


@pytest.fixture
def image_file(tmp_path: Path) -> Path:
    path = tmp_path / "cat.jpg"
    path.write_bytes(JPEG_HEADER + b"\x00" * 64)
    return path


@pytest.fixture
def text_file(tmp_path: Path) -> Path:
    path = tmp_path / "notes.txt"
    path.write_text("not an image")
    return path


@pytest.fixture
def selected_image() -> SelectedImage:
    return SelectedImage(data=JPEG_HEADER + b"\x01" * 32, mime_type="image/jpeg", name="cat.jpg")


class FakeClient:
    """Conversion client returning canned outcomes and recording its calls."""

    def __init__(self, outcome=None):
        self.outcome = outcome if outcome is not None else ConversionResult(b"glTF-model", "model/gltf-binary")
        self.calls: list[SelectedImage] = []

    def convert(self, image):
        self.calls.append(image)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


class BlockingClient(FakeClient):
    """Fake client that holds every request until ``release()`` is called."""

    def __init__(self, outcome=None):
        super().__init__(outcome)
        self._gate = threading.Event()
        self.started = threading.Event()

    def convert(self, image):
        self.calls.append(image)
        self.started.set()
        self._gate.wait(timeout=10)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome

    def release(self):
        self._gate.set()


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def failing_client() -> FakeClient:
    return FakeClient(ConversionError("model overloaded", status_code=500))


@pytest.fixture
def blocking_client():
    client = BlockingClient()
    yield client
    client.release()


@pytest.fixture
def make_client():
    """Factory for fake clients with a given outcome."""
    return FakeClient


class FakeRenderer:
    """Renderer that records what it was asked to show."""

    def __init__(self):
        from PySide6.QtWidgets import QWidget

        self._widget = QWidget()
        self.shown: list[str] = []
        self.cleared = 0

    def widget(self):
        return self._widget

    def show_model(self, url):
        self.shown.append(url)

    def clear(self):
        self.cleared += 1


class FakeSaver:
    """Saver writing into a fixed directory without any dialog."""

    def __init__(self, directory: Path):
        self.directory = directory
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        path = self.directory / request.filename
        path.write_bytes(request.data)
        return str(path)


@pytest.fixture
def renderer(qapp) -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def saver(tmp_path) -> FakeSaver:
    downloads = tmp_path / "downloads"
    downloads.mkdir()
    return FakeSaver(downloads)
