"""Tests for base64 buffer transport."""

import base64

import numpy as np
import pytest

from numberpaint.utils.buffers import decode_label_map, decode_rgba, encode_array


def test_rgba_layout_is_row_major():
    raw = bytes(range(2 * 3 * 4))
    pixels = decode_rgba(base64.b64encode(raw).decode(), width=3, height=2)
    assert pixels.shape == (2, 3, 4)
    assert pixels[1, 0].tolist() == [12, 13, 14, 15]


def test_label_map_is_little_endian_int32():
    labels = np.array([[1, 70000], [-1, 3]], dtype=np.int32)
    encoded = encode_array(labels)
    assert base64.b64decode(encoded)[:4] == b"\x01\x00\x00\x00"
    np.testing.assert_array_equal(decode_label_map(encoded, 2, 2), labels)


def test_wrong_size_rejected():
    with pytest.raises(ValueError):
        decode_rgba(base64.b64encode(b"\x00" * 7).decode(), 1, 2)


def test_bad_base64_rejected():
    with pytest.raises(ValueError):
        decode_rgba("not base64!!", 1, 1)
