"""
Client for the remote image-to-3D conversion service.

This module wraps the single outbound request that turns an image into a
3D model. It is safe to call from a worker thread: it holds no shared state
and reports failures as typed errors instead of touching the UI.
"""

from __future__ import annotations

import logging
from typing import Any

import jsonschema
import requests

from .config_manager import ServiceConfig
from .errors import (
    GENERIC_CONVERSION_MESSAGE,
    ConversionError,
    ErrorCode,
    MissingInputError,
    TransportError,
)
from .models import ConversionResult, SelectedImage

logger = logging.getLogger(__name__)

IMAGE_FIELD = "image"
DEFAULT_MEDIA_TYPE = "application/octet-stream"

# Shape of the JSON body the service sends with a non-2xx status
ERROR_BODY_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["error"],
    "properties": {"error": {"type": "string", "minLength": 1}},
}


class ConversionClient:
    """
    Sends one image to the conversion service and returns the model bytes.

    Every call is a single attempt; there is no retry.
    """

    def __init__(self, config: ServiceConfig, session: requests.Session | None = None) -> None:
        """
        Initialize the client.

        Args:
            config: Endpoint, credential, timeout and output format
            session: Optional requests session (a plain ``requests.post`` is used otherwise)
        """
        self.config = config
        self._session = session

    def convert(self, image: SelectedImage) -> ConversionResult:
        """
        Convert an image into a 3D model.

        Args:
            image: The selected image

        Returns:
            ConversionResult with the model bytes and suggested filename

        Raises:
            MissingInputError: If the image has no content
            ConversionError: If the service answers with a non-success status or an empty body
            TransportError: If no HTTP response was received
        """
        if not image.data:
            raise MissingInputError(f"{image.name} is empty")

        logger.info(f"Submitting {image.name} ({image.size} bytes, {image.mime_type}) for conversion")

        try:
            response = self._post(image)
        except requests.Timeout as e:
            logger.error(f"Conversion request timed out after {self.config.timeout:g}s")
            raise TransportError(
                "The conversion service did not respond in time. Please try again.",
                code=ErrorCode.TIMEOUT,
                technical_message=str(e),
            ) from e
        except requests.RequestException as e:
            logger.error(f"Conversion request failed: {e.__class__.__name__}")
            raise TransportError(technical_message=str(e)) from e

        if not response.ok:
            message = self._extract_error_message(response)
            logger.error(f"Conversion service returned HTTP {response.status_code}: {message}")
            raise ConversionError(
                message,
                status_code=response.status_code,
                technical_message=f"HTTP {response.status_code} {response.reason or ''}".strip(),
            )

        payload = response.content
        if not payload:
            logger.error("Conversion service returned an empty body")
            raise ConversionError(
                "The conversion service returned an empty model",
                code=ErrorCode.EMPTY_RESULT,
                status_code=response.status_code,
            )

        media_type = response.headers.get("Content-Type", DEFAULT_MEDIA_TYPE).split(";", 1)[0].strip()
        result = ConversionResult(
            data=payload,
            media_type=media_type or DEFAULT_MEDIA_TYPE,
            suggested_filename=self.config.suggested_filename,
        )
        logger.info(f"Conversion succeeded: {result.size} bytes ({result.media_type})")
        return result

    def _post(self, image: SelectedImage) -> requests.Response:
        post = self._session.post if self._session is not None else requests.post
        return post(
            self.config.endpoint,
            headers={"Authorization": f"Bearer {self.config.api_key}"},
            files={IMAGE_FIELD: (image.name, image.data, image.mime_type)},
            timeout=self.config.timeout,
        )

    @staticmethod
    def _extract_error_message(response: requests.Response) -> str:
        """
        Return the service's ``error`` string, or the generic message.

        The body must be a JSON object with a non-empty ``error`` string;
        anything else falls back to the generic message.
        """
        try:
            body = response.json()
        except ValueError:
            logger.debug("Error response body is not JSON")
            return GENERIC_CONVERSION_MESSAGE

        try:
            jsonschema.validate(body, ERROR_BODY_SCHEMA)
        except jsonschema.ValidationError as e:
            logger.debug(f"Error response body has unexpected shape: {e.message}")
            return GENERIC_CONVERSION_MESSAGE

        return body["error"]
