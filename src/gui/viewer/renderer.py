"""
Model renderers used by the model presenter.
"""

import html
import logging
from typing import Protocol

from PySide6.QtCore import QUrl
from PySide6.QtWebEngineCore import QWebEngineSettings
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import QWidget

from core.asset_store import ASSET_SCHEME, ASSET_URL_PREFIX, AssetStore
from gui.utils.styling import AccessiblePalette

from .scheme import AssetSchemeHandler

logger = logging.getLogger(__name__)

MODEL_VIEWER_SCRIPT = "https://ajax.googleapis.com/ajax/libs/model-viewer/3.5.0/model-viewer.min.js"

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<script type="module" src="{script}"></script>
<style>
  html, body {{ margin: 0; height: 100%; background: {background}; }}
  model-viewer {{ width: 100%; height: 100%; }}
</style>
</head>
<body>
<model-viewer src="{src}" alt="Converted 3D model" camera-controls auto-rotate></model-viewer>
</body>
</html>
"""


class ModelRenderer(Protocol):
    """Something that can display a 3D model given its asset URL."""

    def widget(self) -> QWidget: ...

    def show_model(self, url: str) -> None: ...

    def clear(self) -> None: ...


class WebModelRenderer:
    """
    Renders models with the ``<model-viewer>`` web component.

    The page is served from the asset origin so the model request is
    same-origin. Rotation and zoom come from ``camera-controls``.
    """

    def __init__(self, store: AssetStore, parent: QWidget | None = None) -> None:
        self._view = QWebEngineView(parent)
        self._view.setAccessibleName("3D model viewer")

        settings = self._view.settings()
        settings.setAttribute(QWebEngineSettings.WebAttribute.JavascriptEnabled, True)
        settings.setAttribute(QWebEngineSettings.WebAttribute.WebGLEnabled, True)
        settings.setAttribute(QWebEngineSettings.WebAttribute.Accelerated2dCanvasEnabled, True)

        self._handler = AssetSchemeHandler(store, self._view)
        profile = self._view.page().profile()
        if profile.urlSchemeHandler(ASSET_SCHEME.encode()) is None:
            profile.installUrlSchemeHandler(ASSET_SCHEME.encode(), self._handler)

    def widget(self) -> QWidget:
        return self._view

    def show_model(self, url: str) -> None:
        page = _PAGE_TEMPLATE.format(
            script=MODEL_VIEWER_SCRIPT,
            background=AccessiblePalette.VIEWER_BG,
            src=html.escape(url, quote=True),
        )
        self._view.setHtml(page, QUrl(ASSET_URL_PREFIX))
        logger.debug(f"Rendering {url}")

    def clear(self) -> None:
        self._view.setUrl(QUrl("about:blank"))
