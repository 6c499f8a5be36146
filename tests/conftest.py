"""Shared test setup."""

import matplotlib

# headless backend for chart tests
matplotlib.use("Agg")
