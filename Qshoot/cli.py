#!/usr/bin/env python3
"""
Qshoot CLI - Command line interface for quick shooting solves

Examples:
    qshoot-cli "0,0,0,10,10,10,0,0,0"
    qshoot-cli --system box --points 201 --dx 0.005 --reference
    qshoot-cli --system barrier --points 9 --plot
    qshoot-cli list
"""

import argparse
import logging
import sys

import Qshoot
from Qshoot.potentials import DEFAULT_POTENTIAL
from Qshoot.app import AppState, DEFAULT_DX, DEFAULT_HBAR, format_eigenvalue, solve_action


def list_systems():
    """List all available named potentials"""
    systems = Qshoot.list_potentials()
    print("\nAvailable potentials:")
    print("-" * 30)
    for name in sorted(systems):
        print(f"  {name}")
    print(f"\nTotal: {len(systems)} potentials")
    print("\nExample: qshoot-cli --system barrier --points 9")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Qshoot CLI - 1D Schrödinger shooting solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  qshoot-cli "0,0,0,10,10,10,0,0,0"          # Solve a comma-separated potential
  qshoot-cli --system box --points 101       # Sample a named potential
  qshoot-cli --system box --reference        # Also diagonalise the Hamiltonian
  qshoot-cli "0,0,0" --plot                  # Wrong length: default potential is used
  qshoot-cli list                            # List all named potentials
        """
    )

    parser.add_argument(
        'potential',
        nargs='?',
        help="Comma-separated potential values, or 'list'"
    )

    parser.add_argument(
        '--system',
        type=str,
        metavar='NAME',
        help='Named potential to sample instead of POTENTIAL'
    )

    parser.add_argument(
        '-g', '--points',
        type=int,
        default=None,
        help='Number of grid points (default: 9 for POTENTIAL, 101 with --system)'
    )

    parser.add_argument(
        '--dx',
        type=float,
        default=DEFAULT_DX,
        help=f'Grid spacing (default: {DEFAULT_DX})'
    )

    parser.add_argument(
        '--hbar',
        type=float,
        default=DEFAULT_HBAR,
        help=f'Reduced Planck constant (default: {DEFAULT_HBAR})'
    )

    parser.add_argument(
        '--seed',
        type=float,
        default=Qshoot.DEFAULT_SEED,
        help=f'Amplitude at the first interior point (default: {Qshoot.DEFAULT_SEED})'
    )

    parser.add_argument(
        '--reference',
        action='store_true',
        help='Also report the lowest eigenvalue from diagonalisation'
    )

    parser.add_argument(
        '-p', '--plot',
        action='store_true',
        help='Display wavefunction plot'
    )

    parser.add_argument(
        '-s', '--save',
        type=str,
        metavar='FILE',
        help='Save results to file'
    )

    parser.add_argument(
        '--info',
        action='store_true',
        help='Show detailed information about the result'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log progress information'
    )
    return parser


def solve_text(args) -> "Qshoot.Result":
    """Solve a typed potential, falling back to the default on bad input."""
    text = args.potential
    expected = args.points if args.points is not None else len(DEFAULT_POTENTIAL)
    state = AppState(
        potential_text=text,
        dx=args.dx,
        hbar=args.hbar,
        expected_length=expected,
    )
    state = solve_action(state, seed=args.seed)
    if state.used_fallback:
        print(f"Invalid potential ({state.message}); using default potential")

    system = Qshoot.System(
        potential=state.potential,
        dx=state.dx,
        hbar=state.hbar,
        metadata={'name': 'default' if state.used_fallback else 'custom'},
    )
    return Qshoot.Result(
        energy=state.eigenvalue,
        wavefunction=state.wavefunction,
        system=system,
        info={'method': 'shooting', 'seed': args.seed, 'points': len(state.potential)},
    )


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.potential == 'list' or (not args.potential and not args.system):
        list_systems()
        return 0

    if args.system and args.system not in Qshoot.list_potentials():
        print(f"Error: Unknown system '{args.system}'")
        print("Use 'qshoot-cli list' to see available potentials")

        suggestions = [s for s in Qshoot.list_potentials() if args.system.lower() in s.lower()]
        if suggestions:
            print(f"\nDid you mean: {', '.join(suggestions)}?")
        return 1

    try:
        if args.system:
            system = Qshoot.System.create(
                args.system,
                points=args.points if args.points is not None else 101,
                dx=args.dx,
                hbar=args.hbar,
            )
            print(f"\nSolving {args.system} system ({system.grid.points} points)...")
            result = Qshoot.solve_system(system, seed=args.seed, verbose=args.verbose)
        else:
            result = solve_text(args)

        print(format_eigenvalue(result.energy))

        if args.reference:
            reference = Qshoot.solve_system(result.system, method='reference')
            print(f"Reference ground state: {reference.energy:.4f}")

        if args.info:
            system = result.system
            print("\nSystem information:")
            print(f"  Grid points: {system.grid.points}")
            print(f"  Grid spacing: {system.dx:.6g}")
            print(f"  Domain size: {system.grid.size:.6g}")
            print(f"  hbar: {system.hbar:g}")
            print(f"  Norm: {result.norm:.10f}")
            print(f"  <x> = {result.position_expectation():.6f}")
            print(f"  Δx = {result.position_uncertainty():.6f}")
            if 'solve_time' in result.info:
                print(f"  Solver time: {result.info['solve_time']:.3f}s")

        if args.save:
            result.save(args.save)
            print(f"\nResults saved to: {args.save}")
            if not args.save.endswith('.npz'):
                print(f"  (saved as {args.save}.npz)")

        if args.plot:
            try:
                result.plot()
                print("\nPlot displayed. Close window to exit.")
            except Exception as e:
                print(f"\nWarning: Could not display plot ({e})")
                print("Make sure you have matplotlib installed and a display available.")

    except Qshoot.SolverError as e:
        print(f"\nError: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
