"""JSON decoding shared by the prediction and weather extractors."""

from __future__ import annotations

import json
import logging
from typing import Any

_logger = logging.getLogger(__name__)

PREVIEW_CHARS = 256


class UnparsableResponse(Exception):
    """Raised when a response body is not the JSON structure we expect."""


def decode_json(body: bytes | str) -> Any:
    """Decode a JSON body, logging a one-line preview when it is invalid."""
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    try:
        return json.loads(text)
    except ValueError as exc:
        _logger.warning("JSON parse failed (len=%d)", len(text))
        preview = text[:PREVIEW_CHARS].replace("\r", " ").replace("\n", " ")
        if preview:
            _logger.warning("JSON preview: %s", preview)
        raise UnparsableResponse(f"Response was not valid JSON: {exc}") from exc


__all__ = ["UnparsableResponse", "decode_json"]
