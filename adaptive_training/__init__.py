"""
Adaptive training engine package.

This package provides tools for logging workout sets, estimating
one-rep maxes, suggesting the next session's load, and moving the
training log in and out of Excel workbooks.
"""

__version__ = "0.1.0"
