"""
Hex Encoder

Converts byte buffers into their hex-string representation.
"""

from typing import Iterable, Union

BytesLike = Union[bytes, bytearray, memoryview, Iterable[int]]


def encode(data: BytesLike, uppercase: bool = False) -> str:
    """
    Encode a byte sequence as hex, two characters per byte.

    Args:
        data: Any byte sequence (bytes, bytearray or iterable of ints 0-255)
        uppercase: Emit A-F instead of a-f

    Returns:
        Hex string of length 2 * len(data)
    """
    encoded = bytes(data).hex()
    return encoded.upper() if uppercase else encoded
