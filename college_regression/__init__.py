"""Ridge vs lasso on the College graduation-rate data."""

__version__ = "0.1.0"
