"""
Qshoot/visualisation.py - Visualisation utilities
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Optional
from numpy.typing import NDArray

from .Core import Result
from .app import AppState, format_eigenvalue


def plot_wavefunction(
    x: NDArray,
    psi: NDArray,
    energy: float,
    potential: Optional[NDArray] = None,
    title: Optional[str] = None,
    ylabel: str = 'ψ(x)',
    figsize: tuple = (8, 5),
    save_path: Optional[str] = None,
    show: bool = True,
) -> plt.Figure:
    """Line plot of ψ(x) with the potential on a twin axis.

    Args:
        x: Grid coordinates
        psi: Wavefunction values
        energy: Eigenvalue shown in the title
        potential: Potential to overlay (omitted if None)
        title: Figure title (default: the formatted eigenvalue)
        ylabel: Label of the wavefunction axis
        figsize: Figure size
        save_path: Path to save figure
        show: Display figure

    Returns:
        Matplotlib figure object
    """
    fig, ax = plt.subplots(figsize=figsize)

    ax.plot(x, psi, color='tab:blue', linewidth=2, marker='o', markersize=3, label=ylabel)
    ax.fill_between(x, 0, psi, alpha=0.3, color='tab:blue')
    ax.axhline(y=0, color='k', linestyle='--', alpha=0.3)
    ax.set_xlabel('Position x')
    ax.set_ylabel(ylabel)
    ax.grid(True, alpha=0.3)
    if len(x) > 1:
        ax.set_xlim(x[0], x[-1])

    if potential is not None:
        ax2 = ax.twinx()
        ax2.step(x, potential, 'k--', where='mid', alpha=0.5, linewidth=1)
        ax2.set_ylabel('V(x)', color='k', alpha=0.7)
        ax2.tick_params(axis='y', labelcolor='k')

    ax.set_title(title or format_eigenvalue(energy))
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')

    if show:
        plt.show()

    return fig


def plot_result(
    result: Result,
    show_potential: bool = True,
    show_probability: bool = False,
    figsize: tuple = (8, 5),
    save_path: Optional[str] = None,
    show: bool = True,
) -> plt.Figure:
    """Plot a solver result.

    Args:
        result: Result object from solver
        show_potential: Show potential energy curve
        show_probability: Plot |ψ|² instead of ψ
        figsize: Figure size
        save_path: Path to save figure
        show: Display figure
    """
    psi = result.density if show_probability else result.wavefunction
    title = f'{result.system.name.title()} System: {format_eigenvalue(result.energy)}'
    fig = plot_wavefunction(
        result.x,
        psi,
        result.energy,
        potential=result.system.potential if show_potential else None,
        title=title,
        ylabel='|ψ(x)|²' if show_probability else 'ψ(x)',
        figsize=figsize,
        save_path=save_path,
        show=show,
    )
    return fig


def plot_state(state: AppState, **kwargs) -> plt.Figure:
    """Render the current application state."""
    if not state.has_result:
        raise ValueError("Nothing to plot: the state has not been solved yet")
    return plot_wavefunction(
        state.x,
        state.wavefunction,
        state.eigenvalue,
        potential=np.asarray(state.potential),
        **kwargs,
    )
