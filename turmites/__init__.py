"""Turmite simulation: generalized Langton's Ants on an unbounded grid."""

__version__ = "0.1.0"
