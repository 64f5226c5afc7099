"""Exceptions raised while preparing or rendering a bar chart race."""


class BarRaceError(Exception):
    """Base exception for bar chart race errors."""
    pass


class ConfigurationError(BarRaceError):
    """Raised when options or the dataset shape make the chart impossible to set up."""
    pass


class DataError(BarRaceError):
    """Raised when input data cannot be read or decoded."""
    pass
