"""
Qshoot/potentials.py - Common one-dimensional potentials on a wall-anchored grid

Every function takes the grid coordinates ``x`` (with the left wall at
``x = 0``) and returns the potential sampled at each point.
"""

import numpy as np
from typing import Callable
from numpy.typing import NDArray


DEFAULT_POTENTIAL = (0.0, 0.0, 0.0, 10.0, 10.0, 10.0, 0.0, 0.0, 0.0)


def _extent(x: NDArray) -> float:
    """Domain length N·dx implied by a uniform grid starting at 0."""
    return float(x[-1] + (x[1] - x[0]))


def particle_box(x: NDArray) -> NDArray:
    """Particle in a box (infinite square well).

    V(x) = 0 inside; the walls are the Dirichlet boundaries of the grid.
    """
    return np.zeros_like(x, dtype=float)


def barrier(x: NDArray, height: float = 10.0, start: float = 1/3, stop: float = 2/3) -> NDArray:
    """Rectangular barrier across a fraction of the domain.

    With the defaults and 9 points this reproduces
    ``[0, 0, 0, 10, 10, 10, 0, 0, 0]``.

    Args:
        x: Position array
        height: Barrier height
        start: Left edge as a fraction of the domain length
        stop: Right edge as a fraction of the domain length
    """
    if not 0 <= start < stop <= 1:
        raise ValueError(f"Barrier edges must satisfy 0 <= start < stop <= 1, got {start}, {stop}")
    L = _extent(x)
    # Small tolerance so grid points sitting on an edge are classified stably
    eps = 1e-9 * L
    V = np.zeros_like(x, dtype=float)
    V[(x >= start * L - eps) & (x < stop * L - eps)] = height
    return V


def finite_well(x: NDArray, depth: float = 10.0, width: float = 1/3) -> NDArray:
    """Finite square well centred in the domain.

    V(x) = -V₀ for |x - L/2| < w·L/2, 0 otherwise

    Args:
        x: Position array
        depth: Well depth (V₀)
        width: Well width as a fraction of the domain length
    """
    L = _extent(x)
    V = np.zeros_like(x, dtype=float)
    V[np.abs(x - L / 2) < width * L / 2] = -depth
    return V


def step(x: NDArray, height: float = 10.0, position: float = 0.5) -> NDArray:
    """Potential step at a fraction of the domain length."""
    L = _extent(x)
    return np.where(x >= position * L, float(height), 0.0)


def harmonic_oscillator(x: NDArray, omega: float = 1.0, center: float = None) -> NDArray:
    """Harmonic oscillator potential.

    V(x) = 0.5 * ω² * (x - x₀)²

    Args:
        x: Position array
        omega: Angular frequency (default: 1.0)
        center: Center position (default: middle of the domain)
    """
    if center is None:
        center = _extent(x) / 2
    return 0.5 * omega**2 * (x - center)**2


def linear_potential(x: NDArray, field_strength: float = 1.0) -> NDArray:
    """Linear potential (constant force).

    V(x) = F * x
    """
    return field_strength * np.asarray(x, dtype=float)


def double_well(x: NDArray, barrier_height: float = 2.0) -> NDArray:
    """Quartic double well with minima at L/4 and 3L/4.

    V(x) = V₀ * [(u² - 1)]², u = (x - L/2) / (L/4)
    """
    L = _extent(x)
    u = (x - L / 2) / (L / 4)
    return barrier_height * (u**2 - 1)**2


# Registry of all available potentials
POTENTIALS = {
    'box': particle_box,
    'barrier': barrier,
    'finite_well': finite_well,
    'step': step,
    'harmonic': harmonic_oscillator,
    'linear': linear_potential,
    'double_well': double_well,
}


def list_potentials() -> list[str]:
    """List all available potential names."""
    return list(POTENTIALS.keys())


def get_potential(name: str) -> Callable:
    """Get potential function by name."""
    if name not in POTENTIALS:
        available = ", ".join(POTENTIALS.keys())
        suggestions = [p for p in POTENTIALS if name.lower() in p or p in name.lower()]
        message = f"Unknown potential '{name}'."
        if suggestions:
            message += f" Did you mean: {', '.join(suggestions)}?"
        raise ValueError(f"{message} Available: {available}")
    return POTENTIALS[name]
