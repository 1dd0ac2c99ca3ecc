"""Plain-text rendering of state vectors.

Amplitudes are printed as ``<real> + <imaginary>i``. Integral parts are
written without a fractional part (``0``, ``1``, ``-1``); everything else
uses the shortest round-tripping float repr.
"""

from __future__ import annotations

import math
import sys
from typing import IO, TYPE_CHECKING, Iterable, Optional, Union

import torch

from qvector.amplitude import Amplitude

if TYPE_CHECKING:
    from qvector.state import StateVector

StateLike = Union["StateVector", torch.Tensor, Iterable[Amplitude]]


def _format_real(value: float) -> str:
    if value == 0.0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def format_amplitude(amplitude: Amplitude | complex) -> str:
    """Render one amplitude as ``<real> + <imaginary>i``."""
    if not isinstance(amplitude, Amplitude):
        amplitude = Amplitude.from_complex(amplitude)
    return f"{_format_real(amplitude.real)} + {_format_real(amplitude.imag)}i"


def _amplitudes(state: StateLike) -> list[Amplitude]:
    if isinstance(state, torch.Tensor):
        if state.dim() != 1:
            raise ValueError(f"expected a 1-D state tensor, got shape {tuple(state.shape)}")
        return [Amplitude.from_complex(z) for z in state.detach().cpu().tolist()]
    return [a if isinstance(a, Amplitude) else Amplitude.from_complex(a) for a in state]


def format_statevector(state: StateLike, indent: str = "    ") -> str:
    """
    Render a state vector for human inspection.

    One amplitude per line in basis-index order, wrapped in brackets:

        [
            0.7071067811865475 + 0i
            0.7071067811865475 + 0i
        ]

    Parameters
    ----------
    state:
        A StateVector, a 1-D complex tensor, or any iterable of amplitudes.
    indent:
        Prefix for each amplitude line.
    """
    lines = ["["]
    lines.extend(f"{indent}{format_amplitude(a)}" for a in _amplitudes(state))
    lines.append("]")
    return "\n".join(lines)


def print_statevector(
    state: StateLike,
    file: Optional[IO[str]] = None,
) -> None:
    """
    Print a state vector to stdout or a file.

    This is a display helper, so it uses print() intentionally. For
    programmatic access use format_statevector().
    """
    if file is None:
        file = sys.stdout
    print(format_statevector(state), file=file)


__all__ = ["format_amplitude", "format_statevector", "print_statevector"]
