"""Preppy: adaptive TDEE estimation and weekly nutrition coaching."""

__version__ = "0.1.0"
