"""
``asset:`` URL scheme for the embedded web view.
"""

import logging

from PySide6.QtCore import QBuffer, QByteArray, QIODevice, QObject
from PySide6.QtWebEngineCore import QWebEngineUrlRequestJob, QWebEngineUrlScheme, QWebEngineUrlSchemeHandler

from core.asset_store import ASSET_SCHEME, AssetStore
from core.errors import AssetRevokedError

logger = logging.getLogger(__name__)

_registered = False


def register_asset_scheme() -> None:
    """
    Register the ``asset:`` scheme with Qt WebEngine.

    Must run before the QApplication is created. Calling it again is a no-op.
    """
    global _registered
    if _registered:
        return

    scheme = QWebEngineUrlScheme(ASSET_SCHEME.encode())
    scheme.setSyntax(QWebEngineUrlScheme.Syntax.Host)
    scheme.setFlags(
        QWebEngineUrlScheme.Flag.SecureScheme
        | QWebEngineUrlScheme.Flag.CorsEnabled
        | QWebEngineUrlScheme.Flag.ContentSecurityPolicyIgnored
    )
    QWebEngineUrlScheme.registerScheme(scheme)
    _registered = True
    logger.debug(f"Registered URL scheme '{ASSET_SCHEME}:'")


class AssetSchemeHandler(QWebEngineUrlSchemeHandler):
    """Answers ``asset:`` requests with bytes from an AssetStore."""

    def __init__(self, store: AssetStore, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._store = store

    def requestStarted(self, job: QWebEngineUrlRequestJob) -> None:
        url = job.requestUrl().toString()
        try:
            data = self._store.read(url)
            media_type = self._store.media_type(url)
        except AssetRevokedError:
            logger.debug(f"Refusing request for released asset {url}")
            job.fail(QWebEngineUrlRequestJob.Error.UrlNotFound)
            return

        # The buffer must outlive this call and lives until the job is gone
        buffer = QBuffer(parent=self)
        job.destroyed.connect(buffer.deleteLater)
        buffer.setData(QByteArray(data))
        buffer.open(QIODevice.OpenModeFlag.ReadOnly)
        job.reply(media_type.encode(), buffer)
