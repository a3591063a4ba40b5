from __future__ import annotations

import logging
import re
from io import BytesIO
from pathlib import Path
from typing import List, Sequence

import qrcode
from PIL import Image

from .models import Variation
from .payload import payload_text
from .serialize import ensure_parent

logger = logging.getLogger(__name__)

_UNSAFE_RE = re.compile(r"[^A-Za-z0-9._-]+")


def make_qr_png_bytes(data: str, *, box_size: int = 6, border: int = 2) -> bytes:
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img: Image.Image = qr.make_image(fill_color="black", back_color="white").convert("RGB")
    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def code_filename(value: object) -> str:
    stem = _UNSAFE_RE.sub("_", str(value)).strip("_") or "value"
    return f"{stem}.png"


def write_variation_codes(
    variations: Sequence[Variation], out_dir: Path, *, overwrite: bool = False
) -> List[Path]:
    """Write one PNG per distinct variation value; returns the written paths."""
    written: List[Path] = []
    seen = set()
    for variation in variations:
        key = (type(variation.value), variation.value)
        if key in seen:
            continue
        seen.add(key)
        path = out_dir / code_filename(variation.value)
        if path in written:
            path = path.with_name(f"{path.stem}_{len(written)}{path.suffix}")
        if path.exists() and not overwrite:
            raise FileExistsError(
                f"Refusing to overwrite existing file without --force: {path}"
            )
        ensure_parent(path, mkdirs=True)
        path.write_bytes(make_qr_png_bytes(payload_text(variation.value)))
        written.append(path)
    logger.info("Wrote %d QR code(s) to %s", len(written), out_dir)
    return written
