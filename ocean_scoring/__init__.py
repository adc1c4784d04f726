"""
OCEAN Scoring Engine — Big Five trait, facet and derived-risk scoring.

The scoring core is a set of pure, synchronous services under
``ocean_scoring.services``.  ``ocean_scoring.services.score_store`` is the
only component that performs I/O.
"""

__version__ = "1.0.0"
