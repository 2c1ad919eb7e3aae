#!/usr/bin/env python3
"""
Example: Geometry Optimization of an Argon Cluster

Relax a 5-atom argon cluster with the Lennard-Jones force field and a
water molecule with the Morse bond force field, then compare the final
distances with the analytic minima.

Physics:
    Lennard-Jones: the pair minimum lies at 2 * r_vdw (3.76 Å for Ar).
    Morse: each bond relaxes to the sum of covalent radii (0.97 Å for O-H).

Usage:
    python examples/optimize_argon_cluster.py [settings.yaml]
"""
import logging
import sys
from itertools import combinations

import numpy as np

from molopt import GeometryOptimizer, Molecule, OptimizerSettings, load_settings
from molopt.logging_config import setup_logging


def build_cluster() -> Molecule:
    """Non-equilibrium trigonal bipyramid."""
    molecule = Molecule(name="Ar5")
    for position in [
        [0.0, 0.0, 0.0],
        [4.4, 0.0, 0.0],
        [2.2, 4.0, 0.0],
        [2.2, 1.3, 3.9],
        [2.2, 1.3, -3.9],
    ]:
        molecule.add_atom("Ar", position)
    return molecule


def build_water() -> Molecule:
    molecule = Molecule(name="water")
    molecule.add_atom("O", [0.0, 0.0, 0.0])
    molecule.add_atom("H", [1.4, 0.0, 0.0])
    molecule.add_atom("H", [-0.4, 1.2, 0.0])
    molecule.add_bond(0, 1)
    molecule.add_bond(0, 2)
    return molecule


def report(molecule: Molecule, pairs) -> None:
    for i, j in pairs:
        r = np.linalg.norm(molecule.atom(i).position - molecule.atom(j).position)
        print(f"  r({i},{j}) = {r:.4f} Å")


def main() -> None:
    setup_logging(logging.INFO)
    settings = load_settings(sys.argv[1]) if len(sys.argv) > 1 else OptimizerSettings()

    print("=" * 60)
    print("  Lennard-Jones: 5-atom argon cluster")
    print("=" * 60)
    cluster = build_cluster()
    optimizer = GeometryOptimizer(cluster, settings=settings)
    optimizer.set_force_field("lj")
    optimizer.setup()
    print(f"Initial energy: {optimizer.energy():.6f}")

    if not optimizer.optimize():
        print(f"Optimization failed: {optimizer.error_string}")
        sys.exit(1)
    print(f"Final energy:   {optimizer.energy():.6f} ({optimizer.step_count} steps)")
    print(f"Expected pair distance: {2 * 1.88:.4f} Å")
    report(cluster, combinations(range(cluster.size), 2))

    print()
    print("=" * 60)
    print("  Morse: water bonds (background run)")
    print("=" * 60)
    water = build_water()
    handle = GeometryOptimizer.optimize_coordinates_async(water, "morse")
    print(f"Converged: {handle.result()}")
    print(f"Expected bond length: {0.66 + 0.31:.4f} Å")
    report(water, water.bonds)


if __name__ == "__main__":
    main()
