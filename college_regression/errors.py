class CollegeRegressionError(Exception):
    """Base class for every error raised by this package."""


class DataUnavailable(CollegeRegressionError, RuntimeError):
    """The College table is missing, unreadable or off-schema."""


class InsufficientData(CollegeRegressionError, ValueError):
    """Fewer training rows than cross-validation folds."""


class InvalidPenaltyGrid(CollegeRegressionError, ValueError):
    """Empty, negative or non-finite candidate penalties."""


class SchemaMismatch(CollegeRegressionError, ValueError):
    """Rows handed to a fitted model do not carry its predictor columns."""
