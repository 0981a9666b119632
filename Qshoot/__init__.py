"""
Qshoot - Finite-difference shooting solver for the 1D Schrödinger equation

Quick start:
    >>> import Qshoot
    >>> E, psi = Qshoot.solve([0, 0, 0, 10, 10, 10, 0, 0, 0], dx=0.01, hbar=1.0)
    >>> print(f"Eigenvalue: {E:.4f}")
"""

__version__ = "0.1.0"

# Core imports
from .Core import (
    Grid,
    System,
    Result,
    SolverError,
    InvalidInput,
    NumericalInstability,
    DegenerateSolution,
    normalize_wavefunction,
)
from .Solvers import (
    DEFAULT_SEED,
    solve,
    solve_system,
    solve_reference,
    build_coefficients,
    build_hamiltonian,
    propagate,
    boundary_eigenvalue,
    square_well_energy,
)
from .potentials import (
    DEFAULT_POTENTIAL,
    particle_box,
    barrier,
    finite_well,
    step,
    harmonic_oscillator,
    linear_potential,
    double_well,
    list_potentials,
    get_potential,
)
from .app import AppState, parse_potential, solve_action, format_eigenvalue


def solve_quick(system_name: str = "barrier", method: str = "shooting", **kwargs) -> Result:
    """Quick solve for a named potential.

    Examples:
        >>> result = Qshoot.solve_quick("box", points=201, dx=0.005)
        >>> result = Qshoot.solve_quick("finite_well", depth=50.0)
    """
    verbose = kwargs.pop('verbose', False)
    seed = kwargs.pop('seed', DEFAULT_SEED)
    system = System.create(system_name, **kwargs)
    return solve_system(system, method=method, seed=seed, verbose=verbose)


def load_result(filename: str) -> Result:
    """Load a saved result from file.

    Examples:
        >>> result = Qshoot.load_result("barrier.npz")
        >>> print(result.energy)
    """
    return Result.load(filename)


__all__ = [
    # Core classes
    "Grid",
    "System",
    "Result",
    # Errors
    "SolverError",
    "InvalidInput",
    "NumericalInstability",
    "DegenerateSolution",
    # Solver functions
    "solve",
    "solve_system",
    "solve_reference",
    "build_coefficients",
    "build_hamiltonian",
    "propagate",
    "boundary_eigenvalue",
    "normalize_wavefunction",
    "square_well_energy",
    "DEFAULT_SEED",
    # Potentials
    "DEFAULT_POTENTIAL",
    "particle_box",
    "barrier",
    "finite_well",
    "step",
    "harmonic_oscillator",
    "linear_potential",
    "double_well",
    "list_potentials",
    "get_potential",
    # Front end
    "AppState",
    "parse_potential",
    "solve_action",
    "format_eigenvalue",
    # Convenience
    "solve_quick",
    "load_result",
]


def info():
    """Print package information."""
    print(f"Qshoot v{__version__}")
    print("Finite-difference shooting solver for the 1D Schrödinger equation")
    print(f"\nAvailable potentials: {', '.join(list_potentials())}")
    print("\nExample usage:")
    print("  import Qshoot")
    print("  E, psi = Qshoot.solve([0, 0, 0, 10, 10, 10, 0, 0, 0], dx=0.01)")
    print("  Qshoot.solve_quick('box', points=201, dx=0.005).plot()")
