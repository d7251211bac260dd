# -*- coding: utf-8 -*-
"""
Chromahub: Hub-and-spoke color conversion
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: chroma_errors.py — Exception taxonomy.

Decode failures are ordinary, user-triggerable errors and subclass
``ValueError`` so callers can catch them generically.  A singular
matrix in a transform configuration is a broken constant table, not bad
input, and is reported as ``TransformConfigError`` (a ``RuntimeError``).
"""

__all__ = [
    "ChromahubError",
    "HexDecodeError",
    "InvalidLengthError",
    "InvalidDigitError",
    "TransformConfigError",
]


class ChromahubError(Exception):
    """Base class for all errors raised by Chromahub."""


class HexDecodeError(ChromahubError, ValueError):
    """A hexadecimal color string could not be decoded."""


class InvalidLengthError(HexDecodeError):
    """The hex string is neither 3 nor 6 characters long."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(
            f"A web hexadecimal color must be either 6 or 3 digits long, not {length}"
        )


class InvalidDigitError(HexDecodeError):
    """The hex string contains a character that is not a hex digit."""

    def __init__(self, char: str, position: int) -> None:
        self.char = char
        self.position = position
        super().__init__(
            f"A hexadecimal color may only contain hexadecimal digits, "
            f"got {char!r} at position {position}"
        )


class TransformConfigError(ChromahubError, RuntimeError):
    """A matrix/tone-curve configuration is unusable (singular matrix)."""
