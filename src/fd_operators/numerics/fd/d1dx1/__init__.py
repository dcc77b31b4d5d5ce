"""Finite-difference first-derivative operators d/dx.

Builders live in :mod:`.uniform` and :mod:`.nonuniform`; the code ``cXbY``
names the interior order ``X`` and the boundary order ``Y``.
"""

from . import nonuniform, uniform

__all__ = ["uniform", "nonuniform"]
