"""
Exceptions raised by randnoise.

Both derive from ``ValueError`` so callers validating arguments generically
keep working.

Author: Vladislav Yastrebov, CNRS, Mines Paris - PSL, Centre des matériaux
License: BSD-3-Clause
"""


class UnknownGeneratorKind(ValueError):
    """Requested RNG, distribution or sequence generator name is not registered."""

    def __init__(self, kind, known):
        self.kind = kind
        self.known = sorted(known)
        super().__init__(f"Unknown generator kind {kind!r}, expected one of: {', '.join(self.known)}")


class InvalidNoiseConfiguration(ValueError):
    """Noise configuration with structurally invalid values."""
