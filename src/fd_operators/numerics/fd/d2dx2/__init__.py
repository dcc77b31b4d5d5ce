"""Finite-difference second-derivative operators d2/dx2.

Builders live in :mod:`.uniform` and :mod:`.nonuniform`. ``b0`` codes set
the boundary rows to zero (zero curvature at the edge).
"""

from . import nonuniform, uniform

__all__ = ["uniform", "nonuniform"]
