from __future__ import annotations

import os

import pytest

from hsjwt import MalformedToken, decode, encode


@pytest.mark.parametrize(
    "raw, encoded",
    [
        (b"", ""),
        (b"f", "Zg"),
        (b"fo", "Zm8"),
        (b"foo", "Zm9v"),
        (b"foob", "Zm9vYg"),
        (b"\xfb\xff", "-_8"),
    ],
)
def test_known_vectors(raw, encoded):
    assert encode(raw) == encoded
    assert decode(encoded) == raw


def test_output_uses_url_safe_alphabet_without_padding():
    data = bytes(range(256)) * 3
    text = encode(data)
    assert "=" not in text
    assert "+" not in text and "/" not in text
    assert "\n" not in text
    assert decode(text) == data


def test_random_bytes_roundtrip():
    for size in range(0, 70):
        data = os.urandom(size)
        assert decode(encode(data)) == data


def test_decode_accepts_ascii_bytes():
    assert decode(b"Zm9v") == b"foo"


@pytest.mark.parametrize("text", ["Zm9v+", "Zm9v/", "Zm9v=", "Zm 9v", "Zm9vé", "Z"])
def test_decode_rejects_malformed_text(text):
    with pytest.raises(MalformedToken):
        decode(text)
