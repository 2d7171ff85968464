"""
Interactive 3D model viewing for the Image to 3D GUI.

Models are never written to disk for viewing: the web view fetches them
through the ``asset:`` URL scheme, which is answered from the in-memory
asset store.
"""

from .renderer import ModelRenderer, WebModelRenderer
from .scheme import AssetSchemeHandler, register_asset_scheme

__all__ = ["AssetSchemeHandler", "ModelRenderer", "WebModelRenderer", "register_asset_scheme"]
