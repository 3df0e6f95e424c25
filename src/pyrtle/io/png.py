"""PNG export of captured turtle screen bitmaps."""

from __future__ import annotations

import io
import os
from typing import Union

import numpy as np
from pyglet.extlibs import png as pypng

from ..errors import error_encode, error_io


def encode_png(bitmap: np.ndarray) -> bytes:
    """Encode an ``H x W x 4`` RGBA byte bitmap (top row first) as PNG.

    Raises ``TurtleRuntimeError`` (E405) if the bitmap cannot be encoded.
    """
    bitmap = np.asarray(bitmap)
    if bitmap.ndim != 3 or bitmap.shape[2] != 4:
        raise error_encode(f"expected an H x W x 4 RGBA bitmap, got shape {bitmap.shape}")
    if bitmap.dtype != np.uint8:
        raise error_encode(f"expected 8-bit channels, got {bitmap.dtype}")
    height, width = bitmap.shape[:2]

    stream = io.BytesIO()
    try:
        writer = pypng.Writer(width, height, greyscale=False, alpha=True, bitdepth=8)
        writer.write(stream, bitmap.reshape(height, width * 4).tolist())
    except (pypng.Error, ValueError) as exc:
        raise error_encode(exc) from exc
    return stream.getvalue()


def write_png(bitmap: np.ndarray, path: Union[str, os.PathLike]) -> None:
    """Encode ``bitmap`` and write it to ``path``, replacing any existing file.

    The bitmap is encoded before the file is opened, so an encode failure
    leaves an existing file untouched. Raises ``TurtleRuntimeError`` with
    E404 if the file cannot be created or written.
    """
    data = encode_png(bitmap)
    try:
        with open(path, 'wb') as stream:
            stream.write(data)
    except OSError as exc:
        raise error_io(os.fspath(path), exc.strerror or exc) from exc
