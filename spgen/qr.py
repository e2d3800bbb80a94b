"""
QR export: render a password as a PNG image so it can be scanned onto
another device.
"""

from __future__ import annotations

import io
import logging

import qrcode
from qrcode.exceptions import DataOverflowError
from qrcode.image.pil import PilImage

from .errors import QRExportError

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_SIZE = 256
QUIET_ZONE = 2

# Below this many pixels per module phone cameras stop decoding reliably.
MIN_BOX_SIZE = 4

# Payloads longer than this drop from High to Medium error correction.
HIGH_ECC_MAX_BYTES = 100


def make_qr_png(password: str, size: int = DEFAULT_IMAGE_SIZE) -> bytes:
    """
    Encode `password` as a QR code and return the PNG bytes.

    The module size is chosen so the image fits in `size` pixels; if that
    makes modules smaller than MIN_BOX_SIZE the export is refused.
    """
    if not password:
        raise QRExportError("Password is required")

    payload_bytes = len(password.encode("utf-8"))
    ecc = (
        qrcode.constants.ERROR_CORRECT_H
        if payload_bytes <= HIGH_ECC_MAX_BYTES
        else qrcode.constants.ERROR_CORRECT_M
    )

    qr = qrcode.QRCode(
        version=None,
        error_correction=ecc,
        border=QUIET_ZONE,
        image_factory=PilImage,
    )
    qr.add_data(password)
    try:
        qr.make(fit=True)
    except DataOverflowError as exc:
        raise QRExportError(
            f"Password too long ({payload_bytes} bytes) for a QR code"
        ) from exc

    dimension = qr.modules_count + 2 * QUIET_ZONE
    box_size = size // dimension
    if box_size < MIN_BOX_SIZE:
        raise QRExportError(
            f"Module size too small ({box_size}) for dimension {dimension}"
        )
    qr.box_size = box_size

    logger.debug(
        "Rendering QR version=%s modules=%d box=%d", qr.version, qr.modules_count, box_size
    )

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
