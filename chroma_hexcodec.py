# -*- coding: utf-8 -*-
"""
Chromahub: Hub-and-spoke color conversion
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: chroma_hexcodec.py — Web hexadecimal encoding, agnostic of color space.

A triple of reals in [0, 1] is stored as three bytes, Byte(0) = 0.0 and
Byte(255) = 1.0.  Decoding accepts the 6-digit form and the CSS 3-digit
shorthand (each digit doubled, https://www.w3.org/TR/css-color-3/#rgb-color),
in either case.  Encoding always emits 6 lowercase digits and never fails:
out-of-range components are clamped.  No ``#`` prefix is handled here.
"""

import logging
import math
from typing import Final, Sequence

import numpy as np

from chroma_engine import ArrayFloat
from chroma_errors import InvalidDigitError, InvalidLengthError

__all__ = [
    "BYTE_MAX",
    "byte_to_real",
    "real_to_byte",
    "parse_hex_string",
    "to_hex_string",
]

logger = logging.getLogger(__name__)

BYTE_MAX: Final[int] = 255
_HEX_DIGITS: Final[str] = "0123456789abcdefABCDEF"


def byte_to_real(byte: int) -> float:
    """Byte (0..255) -> real in [0, 1]."""
    return byte / float(BYTE_MAX)


def real_to_byte(value: float) -> int:
    """
    Real -> byte, rounding half away from zero and clamping to [0, 255].

    NaN maps to 0, +inf to 255 and -inf to 0.
    """
    if math.isnan(value):
        return 0
    scaled = value * BYTE_MAX
    if scaled >= BYTE_MAX:
        return BYTE_MAX
    if scaled <= 0.0:
        return 0
    return int(math.floor(scaled + 0.5))


def _hex_pair_to_byte(text: str, hi: int, lo: int) -> int:
    for idx in (hi, lo):
        if text[idx] not in _HEX_DIGITS:
            raise InvalidDigitError(text[idx], idx)
    return int(text[hi], 16) * 16 + int(text[lo], 16)


def parse_hex_string(hex_string: str) -> ArrayFloat:
    """
    Decode a 3- or 6-digit hexadecimal color into a normalized triple.

    Args:
        hex_string: e.g. ``"ff0080"`` or ``"f08"``; case-insensitive.

    Returns:
        float64 array of shape (3,) with components ``byte / 255``.

    Raises:
        InvalidLengthError: The string is neither 3 nor 6 characters long.
        InvalidDigitError: A character is not a hexadecimal digit.
    """
    n = len(hex_string)
    if n == 6:
        pairs = ((0, 1), (2, 3), (4, 5))
    elif n == 3:
        pairs = ((0, 0), (1, 1), (2, 2))
    else:
        raise InvalidLengthError(n)

    bytes_ = [_hex_pair_to_byte(hex_string, hi, lo) for hi, lo in pairs]
    return np.array([byte_to_real(b) for b in bytes_], dtype=np.float64)


def to_hex_string(vec: Sequence[float]) -> str:
    """
    Encode a triple as 6 lowercase hex digits.

    Each component is scaled by 255, rounded and clamped, so this never
    fails.  Clamping is logged at DEBUG level.

    Args:
        vec: Three real components, nominally in [0, 1].
    """
    values = np.asarray(vec, dtype=np.float64)
    if values.shape != (3,):
        raise ValueError(f"Expected a triple of shape (3,), got {values.shape}")
    if logger.isEnabledFor(logging.DEBUG) and not np.all((values >= 0.0) & (values <= 1.0)):
        logger.debug("Clamping out-of-range components %s for hex encoding", values)
    return "".join(f"{real_to_byte(float(v)):02x}" for v in values)
