"""Complex amplitude value type."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Complex, Real
from typing import Union

Scalar = Union["Amplitude", complex, float, int]


@dataclass(frozen=True)
class Amplitude:
    """
    A complex probability amplitude stored as two double-precision floats.

    Amplitudes are plain values: every operation returns a new instance and
    nothing is normalized implicitly. Normalization is a property of a whole
    state vector, not of a single amplitude.

    Attributes
    ----------
    real:
        Real part.
    imag:
        Imaginary part.
    """

    real: float = 0.0
    imag: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "real", float(self.real))
        object.__setattr__(self, "imag", float(self.imag))

    @classmethod
    def from_polar(cls, r: float, phi: float) -> "Amplitude":
        """Build an amplitude from its length ``r`` and angle ``phi``."""
        return cls(r * math.cos(phi), r * math.sin(phi))

    @classmethod
    def from_complex(cls, value: complex) -> "Amplitude":
        """Build an amplitude from a Python (or numpy/torch scalar) complex."""
        value = complex(value)
        return cls(value.real, value.imag)

    @classmethod
    def zero(cls) -> "Amplitude":
        return cls(0.0, 0.0)

    @classmethod
    def one(cls) -> "Amplitude":
        return cls(1.0, 0.0)

    @classmethod
    def i(cls) -> "Amplitude":
        """The imaginary unit."""
        return cls(0.0, 1.0)

    def norm_squared(self) -> float:
        """Return |a|², the probability weight carried by this amplitude."""
        return self.real * self.real + self.imag * self.imag

    def norm(self) -> float:
        return math.sqrt(self.norm_squared())

    def conjugate(self) -> "Amplitude":
        return Amplitude(self.real, -self.imag)

    def isclose(self, other: Scalar, atol: float = 1e-9) -> bool:
        """Return True if ``other`` lies within ``atol`` of this amplitude."""
        other = _coerce(other)
        if other is None:
            return False
        return (self - other).norm() <= atol

    def __complex__(self) -> complex:
        return complex(self.real, self.imag)

    def __add__(self, other: Scalar) -> "Amplitude":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return Amplitude(self.real + rhs.real, self.imag + rhs.imag)

    __radd__ = __add__

    def __sub__(self, other: Scalar) -> "Amplitude":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return Amplitude(self.real - rhs.real, self.imag - rhs.imag)

    def __rsub__(self, other: Scalar) -> "Amplitude":
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def __mul__(self, other: Scalar) -> "Amplitude":
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return Amplitude(
            self.real * rhs.real - self.imag * rhs.imag,
            self.real * rhs.imag + self.imag * rhs.real,
        )

    __rmul__ = __mul__

    def __neg__(self) -> "Amplitude":
        return Amplitude(-self.real, -self.imag)

    def __str__(self) -> str:
        # Imported lazily: the formatter module depends on this one.
        from qvector.viz.text import format_amplitude

        return format_amplitude(self)


def _coerce(value: object) -> Amplitude | None:
    if isinstance(value, Amplitude):
        return value
    if isinstance(value, Real):
        return Amplitude(float(value), 0.0)
    if isinstance(value, Complex):
        return Amplitude.from_complex(value)
    return None


__all__ = ["Amplitude"]
