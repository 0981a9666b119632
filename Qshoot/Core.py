"""
Qshoot/Core.py - Core data structures, errors and system definitions
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Sequence, Union
import numpy as np
from numpy.typing import NDArray


class SolverError(Exception):
    """Base class for all errors raised by the Qshoot solvers."""


class InvalidInput(SolverError, ValueError):
    """Malformed potential or non-positive grid constants."""


class NumericalInstability(SolverError, ArithmeticError):
    """The forward recurrence produced a zero denominator or overflowed."""


class DegenerateSolution(SolverError, ArithmeticError):
    """The propagated wavefunction has zero (or non-finite) norm."""


def check_positive(name: str, value) -> float:
    """Validate a strictly positive, finite scalar and return it as float."""
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be a real number, got {value!r}")
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{name} must be a real number, got {value!r}") from None
    if not np.isfinite(value) or value <= 0:
        raise InvalidInput(f"{name} must be positive and finite, got {value}")
    return value


def as_potential(potential: Union[Sequence[float], NDArray]) -> NDArray:
    """Copy ``potential`` into a fresh 1D float array, validating it.

    Raises:
        InvalidInput: if the values are not real, not finite, not
            one-dimensional or fewer than three points.
    """
    try:
        V = np.asarray(potential)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"Potential must be a sequence of real numbers: {e}") from None
    if np.iscomplexobj(V):
        raise InvalidInput("Complex-valued potentials are not supported")
    try:
        V = np.array(V, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"Potential must be a sequence of real numbers: {e}") from None

    if V.ndim != 1:
        raise InvalidInput(f"Potential must be one-dimensional, got shape {V.shape}")
    if V.size < 3:
        raise InvalidInput(
            f"Potential needs at least 3 grid points for the recurrence, got {V.size}"
        )
    if not np.all(np.isfinite(V)):
        raise InvalidInput("Potential contains non-finite values")
    return V


@dataclass
class Grid:
    """Uniform grid starting at the left wall, ``x[i] = i * dx``.

    Examples:
        >>> grid = Grid(points=9, dx=0.01)
        >>> grid.size  # physical extent N * dx
        0.09
    """
    points: int = 9
    dx: float = 0.01

    def __post_init__(self):
        if isinstance(self.points, bool) or not isinstance(self.points, (int, np.integer)):
            raise InvalidInput(f"Grid points must be an integer, got {type(self.points).__name__}")
        if self.points < 3:
            raise InvalidInput(f"Grid must have at least 3 points, got {self.points}")
        self.points = int(self.points)
        self.dx = check_positive("dx", self.dx)
        self.x = np.arange(self.points) * self.dx

    @property
    def size(self) -> float:
        """Physical extent of the domain"""
        return self.points * self.dx

    def __repr__(self) -> str:
        return f"Grid(points={self.points}, dx={self.dx:.3g}, size={self.size:.3g})"


@dataclass
class System:
    """A potential sampled on a uniform grid plus the physical constants.

    Args:
        potential: Potential energy at each grid point
        dx: Grid spacing
        hbar: Reduced Planck constant (default: 1.0, natural units)

    Examples:
        >>> system = System(potential=[0, 0, 0, 10, 10, 10, 0, 0, 0], dx=0.01)
        >>> system.grid.points
        9
    """
    potential: NDArray
    dx: float = 0.01
    hbar: float = 1.0
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.potential = as_potential(self.potential)
        self.potential.setflags(write=False)
        self.dx = check_positive("dx", self.dx)
        self.hbar = check_positive("hbar", self.hbar)
        self.grid = Grid(points=self.potential.size, dx=self.dx)

    @classmethod
    def create(
        cls,
        name: str,
        points: int = 101,
        dx: float = 0.01,
        hbar: float = 1.0,
        **kwargs,
    ) -> "System":
        """Factory method sampling a named potential on a fresh grid.

        Args:
            name: Potential name ('box', 'barrier', 'harmonic', etc.)
            points: Number of grid points
            dx: Grid spacing
            hbar: Reduced Planck constant
            **kwargs: Parameters forwarded to the potential function

        Examples:
            >>> system = System.create('box', points=201, dx=0.005)
            >>> system = System.create('finite_well', depth=50.0)
        """
        # Import here to avoid circular dependency
        from .potentials import get_potential

        potential_func = get_potential(name)
        grid = Grid(points=points, dx=dx)
        return cls(
            potential=potential_func(grid.x, **kwargs),
            dx=grid.dx,
            hbar=hbar,
            metadata={'name': name, **kwargs},
        )

    @property
    def name(self) -> str:
        """System name if created with factory method"""
        return self.metadata.get('name', 'custom')

    def info(self) -> Dict[str, Any]:
        """Get system information"""
        return {
            'name': self.name,
            'grid_points': self.grid.points,
            'grid_spacing': self.dx,
            'domain_size': self.grid.size,
            'hbar': self.hbar,
        }

    def __repr__(self) -> str:
        return f"System(name='{self.name}', grid={self.grid}, hbar={self.hbar:g})"


@dataclass
class Result:
    """Container for a single solve.

    Attributes:
        energy: Eigenvalue estimate
        wavefunction: Normalized wavefunction on the system grid
        system: The system that was solved
        info: Additional solver information
    """
    energy: float
    wavefunction: NDArray
    system: System
    info: Dict[str, Any] = field(default_factory=dict)

    @property
    def x(self) -> NDArray:
        return self.system.grid.x

    @property
    def density(self) -> NDArray:
        """Probability density |ψ|²"""
        return self.wavefunction**2

    @property
    def norm(self) -> float:
        """Discrete norm dx·Σ|ψ|² (1 for a normalized state)"""
        return float(self.system.dx * np.sum(self.density))

    def position_expectation(self) -> float:
        """Calculate <x>"""
        return float(self.system.dx * np.sum(self.x * self.density))

    def position_uncertainty(self) -> float:
        """Calculate position uncertainty Δx"""
        dx = self.system.dx
        x_mean = self.position_expectation()
        x2_mean = dx * np.sum(self.x**2 * self.density)
        return float(np.sqrt(max(x2_mean - x_mean**2, 0.0)))

    def plot(self, **kwargs):
        """Plot the wavefunction (convenience method)."""
        from .visualisation import plot_result

        return plot_result(self, **kwargs)

    def save(self, filename: str):
        """Save results to file (.npz format).

        Args:
            filename: Output filename (will add .npz extension if not present)

        Examples:
            >>> result.save("barrier")  # saves as barrier.npz
        """
        if not filename.endswith('.npz'):
            filename += '.npz'

        save_dict = {
            'energy': self.energy,
            'wavefunction': self.wavefunction,
            'potential': self.system.potential,
            'dx': self.system.dx,
            'hbar': self.system.hbar,
            'system_name': self.system.name,
        }

        # Add info dict items with simple values
        for key, value in self.info.items():
            if isinstance(value, (int, float, str, bool, np.ndarray)):
                save_dict[f'info_{key}'] = value

        np.savez_compressed(filename, **save_dict)

    @classmethod
    def load(cls, filename: str) -> "Result":
        """Load results from file.

        Examples:
            >>> result = Result.load("barrier.npz")
            >>> result.plot()
        """
        if not filename.endswith('.npz'):
            filename += '.npz'

        with np.load(filename) as data:
            system = System(
                potential=data['potential'],
                dx=float(data['dx']),
                hbar=float(data['hbar']),
                metadata={'name': str(data['system_name'])},
            )

            info = {}
            for key in data.files:
                if key.startswith('info_'):
                    value = data[key]
                    info[key[5:]] = value.item() if value.ndim == 0 else value

            return cls(
                energy=float(data['energy']),
                wavefunction=data['wavefunction'],
                system=system,
                info=info,
            )

    def __repr__(self) -> str:
        return (
            f"Result(E={self.energy:.6f}, points={self.system.grid.points}, "
            f"method={self.info.get('method', 'unknown')})"
        )


def normalize_wavefunction(psi: NDArray, dx: float) -> NDArray:
    """Normalize so that dx·Σ|ψ|² = 1.

    Raises:
        DegenerateSolution: if the norm is zero or not finite.
    """
    with np.errstate(over='ignore', under='ignore'):
        norm = np.sqrt(dx * np.sum(np.abs(psi) ** 2))
    if norm == 0 or not np.isfinite(norm):
        raise DegenerateSolution(
            f"Cannot normalize wavefunction: norm is {norm} "
            f"(max |psi| = {np.max(np.abs(psi)):.3e})"
        )
    return psi / norm
