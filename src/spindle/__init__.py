"""Spindle design optimization: physics surrogate, NSGA-II search, maintenance k-NN."""

__version__ = "0.3.0"
