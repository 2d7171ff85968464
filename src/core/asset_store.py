"""
In-memory registry of revocable model assets.

Each converted model is registered under a unique ``asset:`` URL, the desktop
counterpart of a browser object URL. The viewer resolves URLs through the
store, and revoking an asset makes every later read fail, so a released
model can neither be rendered nor saved.
"""

from __future__ import annotations

import logging
import threading
import uuid

from .errors import AssetRevokedError
from .models import ConversionResult

logger = logging.getLogger(__name__)

ASSET_SCHEME = "asset"
ASSET_HOST = "models"
ASSET_URL_PREFIX = f"{ASSET_SCHEME}://{ASSET_HOST}/"


class ModelAsset:
    """
    Handle to a converted model held in an :class:`AssetStore`.

    The handle stays valid until it is revoked; afterwards :meth:`read`
    raises :class:`AssetRevokedError`.
    """

    def __init__(self, store: AssetStore, asset_id: str, suggested_filename: str, media_type: str, size: int) -> None:
        self._store = store
        self.asset_id = asset_id
        self.suggested_filename = suggested_filename
        self.media_type = media_type
        self.size = size

    @property
    def url(self) -> str:
        return f"{ASSET_URL_PREFIX}{self.asset_id}/{self.suggested_filename}"

    @property
    def is_revoked(self) -> bool:
        return not self._store.contains(self.asset_id)

    def read(self) -> bytes:
        """Return the model bytes."""
        return self._store.read(self.url)

    def revoke(self) -> None:
        """Release the underlying bytes. Safe to call more than once."""
        self._store.revoke(self)

    def __repr__(self) -> str:
        state = "revoked" if self.is_revoked else "live"
        return f"ModelAsset(url={self.url!r}, size={self.size}, {state})"


class AssetStore:
    """
    Thread-safe registry mapping asset ids to model bytes.

    Reads may come from the viewer's URL scheme handler while the UI thread
    creates and revokes assets, hence the lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, ConversionResult] = {}

    def create(self, result: ConversionResult) -> ModelAsset:
        """Register a conversion result and return a fresh handle for it."""
        asset_id = uuid.uuid4().hex
        with self._lock:
            self._entries[asset_id] = result
        asset = ModelAsset(self, asset_id, result.suggested_filename, result.media_type, result.size)
        logger.debug(f"Created asset {asset.url} ({result.size} bytes)")
        return asset

    def revoke(self, asset: ModelAsset) -> None:
        with self._lock:
            removed = self._entries.pop(asset.asset_id, None)
        if removed is not None:
            logger.debug(f"Revoked asset {asset.url}")

    def revoke_all(self) -> int:
        """Release every registered asset and return how many were released."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        if count:
            logger.debug(f"Revoked {count} asset(s)")
        return count

    def contains(self, asset_id: str) -> bool:
        with self._lock:
            return asset_id in self._entries

    def read(self, url: str) -> bytes:
        """
        Resolve an ``asset:`` URL to its bytes.

        Raises:
            AssetRevokedError: If the URL is unknown or has been revoked
        """
        asset_id = self.parse_asset_id(url)
        with self._lock:
            entry = self._entries.get(asset_id) if asset_id else None
        if entry is None:
            raise AssetRevokedError(url)
        return entry.data

    def media_type(self, url: str) -> str:
        asset_id = self.parse_asset_id(url)
        with self._lock:
            entry = self._entries.get(asset_id) if asset_id else None
        if entry is None:
            raise AssetRevokedError(url)
        return entry.media_type

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @staticmethod
    def parse_asset_id(url: str) -> str | None:
        """Extract the asset id from ``asset://models/<id>/<filename>``."""
        if not url.startswith(ASSET_URL_PREFIX):
            return None
        asset_id = url[len(ASSET_URL_PREFIX) :].split("/", 1)[0]
        return asset_id or None
