"""
Qshoot/Solvers.py - Finite-difference shooting solver and reference eigensolver
"""

import math
import time
import logging
from typing import Literal, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray
from scipy.sparse import diags
from scipy.sparse.linalg import eigsh

from .Core import (
    System,
    Result,
    InvalidInput,
    NumericalInstability,
    as_potential,
    check_positive,
    normalize_wavefunction,
)

logger = logging.getLogger(__name__)

DEFAULT_SEED = 1e-16

PotentialLike = Union[Sequence[float], NDArray]


def build_coefficients(
    potential: PotentialLike, dx: float, hbar: float = 1.0
) -> Tuple[NDArray, float]:
    """Coefficients of the discretised Hamiltonian for -(ħ/2)ψ'' + Vψ.

    Returns:
        (beta, gamma): ``beta[i] = 2α + V[i]`` is the diagonal at each grid
        point and ``gamma = -α`` the nearest-neighbour coupling, with
        ``α = ħ / (2 dx²)``.
    """
    V = as_potential(potential)
    dx = check_positive("dx", dx)
    hbar = check_positive("hbar", hbar)

    dx2 = dx * dx
    if dx2 == 0 or not math.isfinite(dx2):
        raise NumericalInstability(f"dx={dx} squares to {dx2}; coupling is undefined")
    alpha = hbar / (2 * dx2)
    if alpha == 0 or not math.isfinite(alpha):
        raise NumericalInstability(
            f"Coupling α = ħ/(2dx²) = {alpha} for hbar={hbar}, dx={dx}"
        )

    beta = 2 * alpha + V
    if not np.all(np.isfinite(beta)):
        raise NumericalInstability("Diagonal coefficients overflowed")
    return beta, -alpha


def propagate(beta: NDArray, gamma: float, seed: float = DEFAULT_SEED) -> NDArray:
    """Run the forward recurrence from the left wall.

    Starting from ψ[0] = 0 and ψ[1] = seed, each row i-1 of the zero-energy
    equation γψ[i-2] + β[i-1]ψ[i-1] + γψ[i] = 0 is solved for ψ[i].

    Raises:
        NumericalInstability: on a zero denominator or non-finite amplitude.
    """
    n = len(beta)
    denominator = -gamma
    if abs(denominator) < np.finfo(float).tiny or not math.isfinite(denominator):
        raise NumericalInstability(f"Recurrence denominator is {denominator}")

    b = [float(v) for v in beta]
    psi = [0.0] * n
    psi[1] = float(seed)

    for i in range(2, n):
        value = (b[i - 1] * psi[i - 1] + gamma * psi[i - 2]) / denominator
        if not math.isfinite(value):
            raise NumericalInstability(
                f"Recurrence overflowed at grid point {i} of {n} "
                f"(beta={b[i - 1]:.3e}, psi[i-1]={psi[i - 1]:.3e})"
            )
        psi[i] = value

    return np.array(psi)


def boundary_eigenvalue(psi: NDArray, beta: NDArray, gamma: float, dx: float) -> float:
    """Eigenvalue estimate from the residual of the last row.

    Interior rows are satisfied exactly by the recurrence, so for a
    normalized ψ the Rayleigh quotient dx·⟨ψ|H|ψ⟩ reduces to the Dirichlet
    mismatch at the right wall, dx·ψ[N-1]·(β[N-1]ψ[N-1] + γψ[N-2]).
    """
    with np.errstate(over='ignore', invalid='ignore'):
        energy = dx * psi[-1] * (beta[-1] * psi[-1] + gamma * psi[-2])
    if not np.isfinite(energy):
        raise NumericalInstability(f"Eigenvalue estimate is not finite ({energy})")
    return float(energy)


def solve(
    potential: PotentialLike,
    dx: float,
    hbar: float = 1.0,
    seed: float = DEFAULT_SEED,
) -> Tuple[float, NDArray]:
    """Estimate a bound-state energy and wavefunction for a 1D potential.

    Args:
        potential: Potential energy at each grid point (at least 3 points)
        dx: Grid spacing (> 0)
        hbar: Reduced Planck constant (> 0)
        seed: Amplitude at the first interior point

    Returns:
        (eigenvalue, wavefunction) with the wavefunction normalized so that
        dx·Σψ² = 1 and ψ[0] = 0.

    Raises:
        InvalidInput: bad potential shape or non-positive constants
        NumericalInstability: ill-conditioned recurrence
        DegenerateSolution: the propagated wavefunction has zero norm

    Examples:
        >>> E, psi = solve([0, 0, 0, 10, 10, 10, 0, 0, 0], dx=0.01)
    """
    try:
        seed = float(seed)
    except (TypeError, ValueError):
        raise InvalidInput(f"seed must be a real number, got {seed!r}") from None
    if not math.isfinite(seed):
        raise InvalidInput(f"seed must be finite, got {seed}")

    beta, gamma = build_coefficients(potential, dx, hbar)
    dx = float(dx)
    logger.debug("Propagating %d points (dx=%g, hbar=%g)", len(beta), dx, float(hbar))

    psi = propagate(beta, gamma, seed)
    psi = normalize_wavefunction(psi, dx)
    energy = boundary_eigenvalue(psi, beta, gamma, dx)

    logger.debug("Eigenvalue estimate: %.8g", energy)
    return energy, psi


def build_hamiltonian(
    potential: PotentialLike, dx: float, hbar: float = 1.0, sparse: bool = True
):
    """Build the Hamiltonian on the interior points 1..N-1.

    Walls sit at x = 0 and x = N·dx, so this is the matrix whose Rayleigh
    quotient the shooting estimate evaluates.

    Args:
        potential: Potential at every grid point (the first value is on the wall)
        dx: Grid spacing
        hbar: Reduced Planck constant
        sparse: If True, return a scipy CSR matrix

    Returns:
        Hamiltonian matrix of size (N-1, N-1)
    """
    beta, gamma = build_coefficients(potential, dx, hbar)
    interior = beta[1:]
    n = interior.size
    if sparse:
        off = gamma * np.ones(n - 1)
        return diags([off, interior, off], [-1, 0, 1], format="csr")
    return (
        np.diag(interior)
        + np.diag(gamma * np.ones(n - 1), 1)
        + np.diag(gamma * np.ones(n - 1), -1)
    )


def solve_reference(
    potential: PotentialLike,
    dx: float,
    hbar: float = 1.0,
    method: Literal["auto", "dense", "sparse"] = "auto",
    tolerance: float = 1e-10,
) -> Tuple[float, NDArray]:
    """Lowest eigenpair of the discretised Hamiltonian by diagonalisation.

    The shooting estimate is a variational upper bound on this energy.

    Returns:
        (energy, wavefunction) with ψ[0] = 0 prepended and dx·Σψ² = 1.
    """
    if method not in ("auto", "dense", "sparse"):
        raise ValueError(f"Unknown method '{method}'. Must be 'auto', 'dense' or 'sparse'")

    V = as_potential(potential)
    if method == "auto":
        method = "dense" if V.size < 500 else "sparse"

    H = build_hamiltonian(V, dx, hbar, sparse=(method == "sparse"))

    if method == "dense":
        eigenvalues, eigenvectors = np.linalg.eigh(H)
    else:
        eigenvalues, eigenvectors = eigsh(H, k=1, which="SA", tol=tolerance)

    idx = int(np.argmin(eigenvalues))
    psi = np.concatenate(([0.0], eigenvectors[:, idx]))
    psi = normalize_wavefunction(psi, float(dx))
    # Fix the arbitrary sign so the largest lobe is positive
    if psi[np.argmax(np.abs(psi))] < 0:
        psi = -psi
    return float(eigenvalues[idx]), psi


def square_well_energy(points: int, dx: float, hbar: float = 1.0, level: int = 1) -> float:
    """Closed-form level of the discretised infinite square well (V = 0).

    E_k = 2α(1 - cos(kπ/N)) for k = 1..N-1, which tends to ħk²π²/(2L²)
    with L = N·dx as the grid is refined.
    """
    if not 1 <= level <= points - 1:
        raise ValueError(f"level must be between 1 and {points - 1}, got {level}")
    alpha = hbar / (2 * dx * dx)
    return float(2 * alpha * (1 - np.cos(level * np.pi / points)))


def solve_system(
    system: System,
    method: Literal["shooting", "reference"] = "shooting",
    seed: float = DEFAULT_SEED,
    verbose: bool = False,
) -> Result:
    """Solve a :class:`System` and wrap the output in a :class:`Result`.

    Args:
        system: System to solve
        method: 'shooting' for the forward recurrence estimate or
            'reference' for diagonalisation of the same Hamiltonian
        seed: Amplitude at the first interior point (shooting only)
        verbose: Log progress information

    Returns:
        Result object with the energy, wavefunction and timing info
    """
    if method not in ("shooting", "reference"):
        raise ValueError(f"Unknown method '{method}'. Must be 'shooting' or 'reference'")

    if verbose:
        logger.info("Solving %s system (%s points)...", system.name, system.grid.points)

    start_time = time.time()
    if method == "shooting":
        energy, psi = solve(system.potential, system.dx, system.hbar, seed=seed)
    else:
        energy, psi = solve_reference(system.potential, system.dx, system.hbar)
    solve_time = time.time() - start_time

    info = {
        "method": method,
        "solve_time": solve_time,
        "points": system.grid.points,
    }
    if method == "shooting":
        info["seed"] = float(seed)

    if verbose:
        logger.info("Solved in %.3f seconds", solve_time)
        logger.info("Eigenvalue: E = %.8f", energy)

    return Result(energy=energy, wavefunction=psi, system=system, info=info)
