"""Base64 transport for raw pixel, index and label buffers."""

from __future__ import annotations

import base64
import binascii

import numpy as np
from numpy.typing import NDArray


def _decode(data: str, dtype: np.dtype, shape: tuple[int, ...]) -> NDArray:
    try:
        raw = base64.b64decode(data, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 buffer: {e}") from e
    expected = int(np.prod(shape)) * np.dtype(dtype).itemsize
    if len(raw) != expected:
        raise ValueError(f"Buffer holds {len(raw)} bytes, expected {expected} for shape {shape}")
    return np.frombuffer(raw, dtype=dtype).reshape(shape).copy()


def decode_rgba(data: str, width: int, height: int) -> NDArray[np.uint8]:
    """Row-major RGBA bytes -> (height, width, 4) uint8."""
    return _decode(data, np.dtype(np.uint8), (height, width, 4))


def decode_label_map(data: str, width: int, height: int) -> NDArray[np.int32]:
    """Little-endian int32 labels -> (height, width) int32."""
    return _decode(data, np.dtype("<i4"), (height, width)).astype(np.int32)


def encode_array(arr: NDArray) -> str:
    """Raw row-major bytes (int32 as little-endian) as base64."""
    arr = np.ascontiguousarray(arr)
    if arr.dtype == np.int32:
        arr = arr.astype("<i4")
    return base64.b64encode(arr.tobytes()).decode("ascii")
