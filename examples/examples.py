#!/usr/bin/env python3
"""
Qshoot Examples

This script demonstrates the main features of the shooting solver.
Run individual examples or all of them to see the library in action.
"""

import Qshoot
import numpy as np
import matplotlib.pyplot as plt
from Qshoot.visualisation import plot_state


def example_basic():
    """Example 1: Basic usage - the default barrier potential"""
    print("\n" + "="*60)
    print("Example 1: Basic Usage")
    print("="*60)

    E, psi = Qshoot.solve(Qshoot.DEFAULT_POTENTIAL, dx=0.01, hbar=1.0)

    print(Qshoot.format_eigenvalue(E))
    print(f"Wavefunction: {np.array2string(psi, precision=3)}")
    print(f"Norm dx·Σψ²: {0.01 * np.sum(psi**2):.12f}")


def example_front_end():
    """Example 2: The solve action with input fallback"""
    print("\n" + "="*60)
    print("Example 2: Application State")
    print("="*60)

    state = Qshoot.AppState.initial()
    for text in [state.potential_text, "0,0,0,0,50,0,0,0,0", "not,a,potential"]:
        state = Qshoot.solve_action(state.with_text(text))
        note = " (default used)" if state.used_fallback else ""
        print(f"{text!r:>45}: {Qshoot.format_eigenvalue(state.eigenvalue)}{note}")

    plot_state(state, show=False)
    plt.show()


def example_validation():
    """Example 3: Estimate vs diagonalisation for the infinite square well"""
    print("\n" + "="*60)
    print("Example 3: Infinite Square Well")
    print("="*60)

    print(f"{'Points':<8} {'Shooting':<14} {'Reference':<14} {'Analytic':<14}")
    print("-" * 50)
    for n in [9, 33, 101, 401]:
        dx = 1.0 / n
        E, _ = Qshoot.solve(np.zeros(n), dx)
        E_ref, _ = Qshoot.solve_reference(np.zeros(n), dx)
        print(f"{n:<8} {E:<14.6f} {E_ref:<14.6f} {np.pi**2 / 2:<14.6f}")


def example_named_potentials():
    """Example 4: Named potentials"""
    print("\n" + "="*60)
    print("Example 4: Named Potentials")
    print("="*60)

    fig, axes = plt.subplots(2, 4, figsize=(14, 6))
    for ax, name in zip(axes.flatten(), Qshoot.list_potentials()):
        result = Qshoot.solve_quick(name, points=201, dx=0.005, method='reference')
        print(f"  {name:<12} E = {result.energy:.4f}")
        ax.plot(result.x, result.wavefunction)
        ax.set_title(f'{name}: E={result.energy:.2f}')
    axes[-1, -1].axis('off')
    plt.tight_layout()
    plt.show()


def example_save_load():
    """Example 5: Save and load results"""
    print("\n" + "="*60)
    print("Example 5: Save and Load Results")
    print("="*60)

    result = Qshoot.solve_quick("finite_well", points=101, dx=0.01, depth=500.0)
    print(f"Finite well eigenvalue: {result.energy:.6f}")

    filename = "finite_well_result"
    result.save(filename)
    print(f"\nSaved results to {filename}.npz")

    loaded = Qshoot.load_result(filename)
    print(f"Loaded eigenvalue: {loaded.energy:.6f}")
    print(f"Data integrity check: {np.allclose(result.wavefunction, loaded.wavefunction)}")

    import os
    os.remove(f"{filename}.npz")
    print(f"Cleaned up {filename}.npz")


def main():
    """Run all examples"""
    print("\n" + "="*60)
    print("QSHOOT EXAMPLES")
    print("="*60)

    examples = [
        ("Basic Usage", example_basic),
        ("Application State", example_front_end),
        ("Infinite Square Well", example_validation),
        ("Named Potentials", example_named_potentials),
        ("Save/Load", example_save_load),
    ]

    while True:
        print("\nAvailable examples:")
        for i, (name, _) in enumerate(examples, 1):
            print(f"  {i}. {name}")
        print("  0. Run all examples")
        print("  q. Quit")

        choice = input(f"\nSelect an example (0-{len(examples)} or q): ").strip().lower()

        if choice == 'q':
            break
        elif choice == '0':
            for name, func in examples:
                func()
        else:
            try:
                idx = int(choice) - 1
                if 0 <= idx < len(examples):
                    examples[idx][1]()
                else:
                    print("Invalid choice!")
            except ValueError:
                print("Invalid input!")


if __name__ == '__main__':
    main()
