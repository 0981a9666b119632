"""
Qshoot/app.py - Application state and the solve action for front ends

A front end keeps one :class:`AppState`, lets the user edit
``potential_text`` and calls :func:`solve_action` to get the next state.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .Core import InvalidInput
from .potentials import DEFAULT_POTENTIAL
from .Solvers import solve, DEFAULT_SEED

logger = logging.getLogger(__name__)

DEFAULT_DX = 0.01
DEFAULT_HBAR = 1.0


def format_potential(potential) -> str:
    """Render a potential as the comma-separated text the input box shows."""
    return ",".join(repr(float(v)) for v in potential)


def parse_potential(text: str, expected_length: Optional[int] = len(DEFAULT_POTENTIAL)) -> NDArray:
    """Parse comma-separated decimals into a potential array.

    Args:
        text: User input such as ``"0, 0, 0, 10, 10, 10, 0, 0, 0"``
        expected_length: Required number of values (None to accept any)

    Raises:
        InvalidInput: on an unparseable or non-finite field, or a length mismatch
    """
    fields = [f.strip() for f in text.split(",")]
    values = []
    for i, f in enumerate(fields):
        try:
            value = float(f)
        except ValueError:
            raise InvalidInput(f"Value {i + 1} ({f!r}) is not a number") from None
        if not np.isfinite(value):
            raise InvalidInput(f"Value {i + 1} ({f!r}) is not finite")
        values.append(value)

    if expected_length is not None and len(values) != expected_length:
        raise InvalidInput(f"Expected {expected_length} values, got {len(values)}")
    return np.array(values)


def format_eigenvalue(energy: float, precision: int = 4) -> str:
    """Format the eigenvalue the way the display shows it"""
    return f"Eigenvalue: {energy:.{precision}f}"


@dataclass(frozen=True)
class AppState:
    """Everything the display needs, updated only by :func:`solve_action`.

    Attributes:
        potential_text: Raw text of the potential input
        dx: Grid spacing passed to the solver
        hbar: Reduced Planck constant passed to the solver
        expected_length: Number of values the input must contain
        eigenvalue: Last computed eigenvalue
        wavefunction: Last computed wavefunction (empty before the first solve)
        potential: Potential that produced the current result
        used_fallback: True if the input was rejected and the default used
        message: Reason the input was rejected, if it was
    """
    potential_text: str = ""
    dx: float = DEFAULT_DX
    hbar: float = DEFAULT_HBAR
    expected_length: int = len(DEFAULT_POTENTIAL)
    eigenvalue: float = 0.0
    wavefunction: NDArray = field(default_factory=lambda: np.zeros(0))
    potential: NDArray = field(default_factory=lambda: np.zeros(0))
    used_fallback: bool = False
    message: str = ""

    @classmethod
    def initial(cls, **kwargs) -> "AppState":
        """State with the input box pre-filled from the default potential."""
        return cls(potential_text=format_potential(DEFAULT_POTENTIAL), **kwargs)

    @property
    def x(self) -> NDArray:
        """Grid coordinates x[i] = i·dx of the current wavefunction"""
        return np.arange(len(self.wavefunction)) * self.dx

    @property
    def has_result(self) -> bool:
        return len(self.wavefunction) > 0

    def with_text(self, text: str) -> "AppState":
        return replace(self, potential_text=text)


def solve_action(state: AppState, seed: float = DEFAULT_SEED) -> AppState:
    """Handle a "solve" request and return the updated state.

    Input that fails to parse, or has the wrong number of values, is
    replaced by ``DEFAULT_POTENTIAL``. Solver errors propagate to the caller.
    """
    message = ""
    try:
        potential = parse_potential(state.potential_text, state.expected_length)
        used_fallback = False
    except InvalidInput as e:
        logger.warning("Invalid potential input (%s); using the default potential", e)
        potential = np.array(DEFAULT_POTENTIAL)
        used_fallback = True
        message = str(e)

    energy, psi = solve(potential, state.dx, state.hbar, seed=seed)
    logger.info("Solved %d-point potential: E = %.4f", len(potential), energy)

    return replace(
        state,
        eigenvalue=energy,
        wavefunction=psi,
        potential=potential,
        used_fallback=used_fallback,
        message=message,
    )
