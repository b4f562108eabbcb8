"""Background image input: files to data URIs and data URIs to QImage."""

from __future__ import annotations

import base64
import binascii
import logging
import mimetypes
from pathlib import Path

from PySide6.QtGui import QImage

logger = logging.getLogger(__name__)


class ImageLoadError(ValueError):
    """Raised when a file is not an image or cannot be read."""


def sniff_image_mime(path: Path) -> str | None:
    """Return the ``image/*`` MIME type of *path*, or None."""
    mime, _ = mimetypes.guess_type(str(path))
    if mime and mime.startswith("image/"):
        return mime
    return None


def load_image_data_uri(path: str | Path) -> str:
    """Read an image file into a ``data:`` URI.

    Raises:
        ImageLoadError: the file is not an image type or cannot be read
    """
    path = Path(path)
    mime = sniff_image_mime(path)
    if mime is None:
        raise ImageLoadError(f"Not an image file: {path.name}")
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ImageLoadError(f"Cannot read {path}: {e}") from e
    encoded = base64.b64encode(data).decode("ascii")
    logger.info(f"Loaded background image {path.name} ({len(data)} bytes)")
    return f"data:{mime};base64,{encoded}"


def data_uri_to_bytes(uri: str) -> bytes | None:
    """Decode the payload of a base64 ``data:`` URI, or None if malformed."""
    if not uri or not uri.startswith("data:"):
        return None
    header, sep, payload = uri.partition(",")
    if not sep or not header.endswith(";base64"):
        return None
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None


def data_uri_to_qimage(uri: str | None) -> QImage:
    """Decode a data URI into a QImage. Malformed input gives a null image."""
    if not uri:
        return QImage()
    data = data_uri_to_bytes(uri)
    image = QImage()
    if data is None or not image.loadFromData(data):
        logger.warning("Could not decode background image data")
        return QImage()
    return image
