import pytest
import numpy as np
import Qshoot


class TestPotentials:
    """Test all built-in potential functions."""

    @pytest.mark.parametrize("potential_name", Qshoot.list_potentials())
    def test_potential_callable(self, potential_name):
        """Test that all potentials are callable and solvable."""
        potential = Qshoot.get_potential(potential_name)
        x = np.arange(100) * 0.05
        V = potential(x)
        assert V.shape == x.shape
        assert np.all(np.isfinite(V))

        E, psi = Qshoot.solve(V, dx=0.05)
        assert np.isfinite(E)

    def test_default_barrier(self):
        x = Qshoot.Grid(points=9, dx=0.01).x
        np.testing.assert_array_equal(Qshoot.barrier(x), Qshoot.DEFAULT_POTENTIAL)

    def test_barrier_scales_with_grid(self):
        x = Qshoot.Grid(points=90, dx=0.001).x
        V = Qshoot.barrier(x, height=5.0)
        assert np.count_nonzero(V) == 30
        assert V[30] == 5.0 and V[59] == 5.0 and V[60] == 0.0

    def test_barrier_bad_edges(self):
        with pytest.raises(ValueError):
            Qshoot.barrier(np.arange(9) * 0.01, start=0.8, stop=0.2)

    def test_finite_well_is_centred(self):
        V = Qshoot.finite_well(np.arange(31) * 0.1, depth=4.0)
        inside = np.flatnonzero(V)
        np.testing.assert_array_equal(inside, np.arange(11, 21))
        assert np.all(V[inside] == -4.0)
        assert V[0] == 0.0

    def test_harmonic_minimum_in_middle(self):
        x = np.arange(101) * 0.1
        V = Qshoot.harmonic_oscillator(x)
        assert x[np.argmin(V)] == pytest.approx(5.0, abs=0.1)

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Did you mean: finite_well"):
            Qshoot.get_potential("well")

    def test_custom_potential(self):
        """Test using a custom potential array."""
        x = np.arange(60) * 0.05
        system = Qshoot.System(potential=x**4 - 2 * x**2, dx=0.05)
        result = Qshoot.solve_system(system)
        assert np.isfinite(result.energy)
