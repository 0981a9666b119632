import pytest
import numpy as np
import Qshoot


class TestBasicFunctionality:
    def test_import(self):
        """Test that package imports correctly."""
        assert hasattr(Qshoot, 'System')
        assert hasattr(Qshoot, 'solve')
        assert hasattr(Qshoot, 'Grid')

    def test_version(self):
        """Test version is accessible."""
        assert isinstance(Qshoot.__version__, str)


class TestGrid:
    def test_coordinates(self):
        grid = Qshoot.Grid(points=9, dx=0.01)
        np.testing.assert_allclose(grid.x, np.arange(9) * 0.01)
        assert grid.size == pytest.approx(0.09)

    @pytest.mark.parametrize("points", [0, 2, 2.5, True])
    def test_bad_points(self, points):
        with pytest.raises(Qshoot.InvalidInput):
            Qshoot.Grid(points=points, dx=0.1)

    def test_bad_spacing(self):
        with pytest.raises(Qshoot.InvalidInput):
            Qshoot.Grid(points=9, dx=-0.1)


class TestSystem:
    def test_from_sequence(self):
        system = Qshoot.System(potential=Qshoot.DEFAULT_POTENTIAL, dx=0.01)
        assert system.grid.points == 9
        assert system.name == 'custom'
        assert system.info()['domain_size'] == pytest.approx(0.09)

    def test_potential_is_frozen_copy(self):
        V = np.zeros(5)
        system = Qshoot.System(potential=V, dx=0.1)
        V[2] = 99.0

        assert system.potential[2] == 0.0
        with pytest.raises(ValueError):
            system.potential[0] = 1.0

    def test_create(self):
        system = Qshoot.System.create('barrier', points=9, dx=0.01)
        np.testing.assert_allclose(system.potential, Qshoot.DEFAULT_POTENTIAL)
        assert system.name == 'barrier'

    def test_create_with_parameters(self):
        system = Qshoot.System.create('finite_well', points=30, dx=0.1, depth=5.0)
        assert system.potential.min() == -5.0
        assert system.metadata['depth'] == 5.0

    def test_create_unknown(self):
        with pytest.raises(ValueError, match="Unknown potential"):
            Qshoot.System.create('hydrogen')

    @pytest.mark.parametrize("kwargs", [
        {'potential': [0, 0], 'dx': 0.1},
        {'potential': [0, 0, 0], 'dx': 0.0},
        {'potential': [0, 0, 0], 'dx': 0.1, 'hbar': -1.0},
    ])
    def test_validation(self, kwargs):
        with pytest.raises(Qshoot.InvalidInput):
            Qshoot.System(**kwargs)


class TestResult:
    def test_observables(self):
        # The discrete box ground state is symmetric about the middle of the domain
        result = Qshoot.solve_quick('box', points=51, dx=0.02, method='reference')

        assert result.norm == pytest.approx(1.0)
        np.testing.assert_allclose(result.density, result.wavefunction**2)
        assert result.position_expectation() == pytest.approx(51 * 0.02 / 2, rel=1e-8)
        assert 0 < result.position_uncertainty() < result.system.grid.size / 2

    def test_save_load_results(self, tmp_path):
        """Test saving and loading results."""
        result = Qshoot.solve_quick('barrier', points=9, dx=0.01)
        path = str(tmp_path / "barrier")
        result.save(path)

        loaded = Qshoot.load_result(path + ".npz")

        assert loaded.energy == result.energy
        np.testing.assert_array_equal(loaded.wavefunction, result.wavefunction)
        np.testing.assert_array_equal(loaded.system.potential, result.system.potential)
        assert loaded.system.dx == result.system.dx
        assert loaded.system.name == 'barrier'
        assert loaded.info['method'] == 'shooting'

    def test_repr(self):
        result = Qshoot.solve_quick('barrier', points=9, dx=0.01)
        assert 'shooting' in repr(result)


class TestNormalize:
    def test_normalize(self):
        psi = Qshoot.normalize_wavefunction(np.array([0.0, 3.0, 4.0]), dx=0.5)
        assert np.sum(psi**2) * 0.5 == pytest.approx(1.0)

    @pytest.mark.parametrize("psi", [np.zeros(4), np.array([0.0, np.inf, 1.0])])
    def test_degenerate(self, psi):
        with pytest.raises(Qshoot.DegenerateSolution):
            Qshoot.normalize_wavefunction(psi, dx=0.1)
