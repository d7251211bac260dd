# -*- coding: utf-8 -*-
"""
Chromahub: Hub-and-spoke color conversion
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: chroma_color.py — The color capability shared by every color space.

Concrete subclasses are color spaces; instances are colors in that space.
A space only has to say how to get to and from the CIE 1931 XYZ hub
(``to_ciexyz`` / ``from_ciexyz``).  Conversion between any two spaces, hex
encoding and luminance are derived here, so N spaces need 2N transforms
instead of N² pairwise ones.

Each color holds a single read-only float64 triple and is an immutable value
object: equal when the triples are equal, hashable, unpackable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator, Type, TypeVar

import numpy as np

from chroma_engine import ArrayFloat
from chroma_hexcodec import parse_hex_string, to_hex_string

if TYPE_CHECKING:
    from chroma_hub import CIEXYZ

__all__ = ["Color"]

C = TypeVar("C", bound="Color")


class Color:
    """
    Base class for a color in an arbitrary color space.

    Subclasses must override ``from_ciexyz()`` and ``to_ciexyz()``.

    Attributes:
        COMPONENTS : tuple of str
            Names of the three components, used by ``repr``.
    """

    __slots__ = ("_vec",)

    COMPONENTS: tuple = ("c0", "c1", "c2")

    def __init__(self, c0: float, c1: float, c2: float) -> None:
        vec = np.array([c0, c1, c2], dtype=np.float64)
        vec.flags.writeable = False
        object.__setattr__(self, "_vec", vec)

    # --- Required per space ---

    @classmethod
    def from_ciexyz(cls: Type[C], ciexyz: "CIEXYZ") -> C:
        """Override in subclass: convert a hub color into this space."""
        raise NotImplementedError(f"{cls.__name__} must implement from_ciexyz()")

    def to_ciexyz(self) -> "CIEXYZ":
        """Override in subclass: convert this color to the hub."""
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement to_ciexyz()"
        )

    # --- Raw triple plumbing ---

    @classmethod
    def from_vector3(cls: Type[C], vec: Any) -> C:
        """
        Lift an arbitrary triple of numbers into this color space.

        No validation beyond the shape; useful for implementing
        mathematical transformations between spaces.
        """
        arr = np.asarray(vec, dtype=np.float64)
        if arr.shape != (3,):
            raise ValueError(f"Expected a triple of shape (3,), got {arr.shape}")
        return cls(arr[0], arr[1], arr[2])

    def to_vector3(self) -> ArrayFloat:
        """Return a (writable) copy of the triple."""
        return self._vec.copy()

    # --- Derived conversions ---

    @classmethod
    def from_color(cls: Type[C], color: "Color") -> C:
        """Convert any other color into this space (through the hub)."""
        return cls.from_ciexyz(color.to_ciexyz())

    def to_color(self, cls: Type[C]) -> C:
        """Convert this color into the space ``cls`` (through the hub)."""
        return cls.from_ciexyz(self.to_ciexyz())

    @classmethod
    def from_hex(cls: Type[C], hex_string: str) -> C:
        """
        Interpret a hexadecimal color string in this color space.

        Raises:
            InvalidLengthError, InvalidDigitError: see ``parse_hex_string``.
        """
        return cls.from_vector3(parse_hex_string(hex_string))

    def to_hex(self) -> str:
        """Encode the raw triple as 6 lowercase hex digits (clamped)."""
        return to_hex_string(self._vec)

    def luminance(self) -> float:
        """Relative luminance: Y of the hub color (white = 1.0)."""
        return self.to_ciexyz().luminance()

    # --- Value semantics ---

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __iter__(self) -> Iterator[float]:
        return iter(self._vec.tolist())

    def __eq__(self, other: object) -> bool:
        if other.__class__ is not self.__class__:
            return NotImplemented
        return bool(np.array_equal(self._vec, other._vec))

    def __hash__(self) -> int:
        return hash((self.__class__, tuple(self._vec.tolist())))

    def __repr__(self) -> str:
        parts = ", ".join(
            f"{name}={value!r}" for name, value in zip(self.COMPONENTS, self._vec.tolist())
        )
        return f"{self.__class__.__name__}({parts})"
