# File: demos/run_continuous_beam.py
"""
DEMO: CROSS PROCESS FOR A CONTINUOUS BEAM
=========================================

PURPOSE:
--------
Solves a continuous beam by moment distribution (Cross process) and prints
the model, the fixed-end moments, every balancing step and the final end
moments, support reactions and largest span moments.

Without arguments the three-span reference beam is used:

    spans 8 m / 6 m / 6 m, loads 8 / 38 / 28 kN/m, EI = 10000 kNm²,
    pinned at the left end, fixed at the right end.

With --file a plain-text beam file is loaded instead, and --save writes the
beam back out in the same format.
"""

import argparse
import logging

from cross_beam import CrossSolver, load_beam, save_beam
from cross_beam.diagrams import support_reactions, max_span_moments
from cross_beam.report import model_info_text, results_text, steps_text


def main():
    parser = argparse.ArgumentParser(
        description='Solve a continuous beam by the Cross process',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python demos/run_continuous_beam.py
  python demos/run_continuous_beam.py --file beam.txt --steps
  python demos/run_continuous_beam.py --save out/beam.txt
        """
    )
    parser.add_argument('--file', type=str, default=None, help='Beam file to load')
    parser.add_argument('--save', type=str, default=None, help='Write the beam file here')
    parser.add_argument('--steps', action='store_true', help='Print every balancing step')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    solver = load_beam(args.file) if args.file else CrossSolver.default()

    print("=" * 70)
    print("CROSS PROCESS OF A CONTINUOUS BEAM")
    print("=" * 70)
    print()
    print(model_info_text(solver))
    print("Fixed-end moments:")
    print(results_text(solver))

    solver.run_to_convergence()

    if args.steps:
        print(steps_text(solver))

    print(f"Converged in {solver.num_steps} steps (tolerance {solver.tolerance:g} kNm)")
    print(results_text(solver))

    print("Support reactions [kN]:")
    for i, R in enumerate(support_reactions(solver)):
        print(f"  support {i + 1}: {R:10.{solver.decimal_places}f}")
    print("Largest span moments [kNm]:")
    for i, M in enumerate(max_span_moments(solver)):
        print(f"  member {i + 1}: {M:10.{solver.decimal_places}f}")

    if args.save:
        save_beam(solver, args.save)
        print(f"Beam file saved to: {args.save}")


if __name__ == "__main__":
    main()
