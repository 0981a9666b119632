import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

import pytest
import Qshoot
from Qshoot.app import AppState, solve_action
from Qshoot.visualisation import plot_result, plot_state


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


def test_plot_result():
    result = Qshoot.solve_quick('barrier', points=9, dx=0.01)
    fig = result.plot(show=False)

    assert fig is not None
    # Wavefunction axis plus the twin potential axis
    assert len(fig.axes) == 2
    assert 'Eigenvalue' in fig.axes[0].get_title()


def test_plot_probability_without_potential(tmp_path):
    result = Qshoot.solve_quick('box', points=51, dx=0.02)
    path = tmp_path / 'density.png'
    fig = plot_result(result, show_potential=False, show_probability=True,
                      save_path=str(path), show=False)

    assert len(fig.axes) == 1
    assert fig.axes[0].get_ylabel() == '|ψ(x)|²'
    assert path.exists()


def test_plot_state():
    state = solve_action(AppState.initial())
    fig = plot_state(state, show=False)
    line = fig.axes[0].get_lines()[0]

    assert list(line.get_ydata()) == list(state.wavefunction)


def test_plot_unsolved_state():
    with pytest.raises(ValueError):
        plot_state(AppState.initial(), show=False)
