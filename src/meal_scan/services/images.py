"""Helpers for image payloads sent by clients."""

import base64

JPEG_MIME_TYPE = "image/jpeg"


def strip_data_uri(payload: str) -> str:
    """Drop a leading ``data:<mime>;base64,`` prefix, if present."""
    if payload.startswith("data:") and "," in payload:
        return payload.split(",", 1)[1]
    return payload


def decode_image_payload(image: bytes | str) -> bytes:
    """Return raw image bytes from bytes or a (data URI) base64 string."""
    if isinstance(image, bytes):
        return image
    return base64.b64decode(strip_data_uri(image.strip()))


def to_data_url(image_bytes: bytes, mime_type: str = JPEG_MIME_TYPE) -> str:
    """Convert bytes to a base64 data URL for image input."""
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"
