"""
Model Schema Builder

Inspects a live ORM model registry and produces a normalized,
serializable schema document for UI generators, API builders and
documentation tooling.
"""

__version__ = "1.0.0"
