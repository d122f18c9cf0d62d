"""ReactorLab: virtual lab for a PFR/CSTR reactor train.

This package provides:
- Kinetics: Arrhenius rate constant for the saponification of ethyl acetate
- Reactors: analytic PFR and CSTR conversion, feed concentrations, PFR volume
- Train: stage sequencing and residence-time sweeps at two temperatures
- Solver: SciPy cross-checks of the closed-form conversions
- Web: Flask pages and the datasheet hand-off

Run the CLI with: python -m reactorlab.cli
"""

__version__ = "0.1.0"
