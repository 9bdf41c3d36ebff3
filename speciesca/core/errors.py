"""Exceptions raised by the simulation core."""


class ConfigurationError(ValueError):
    """Invalid grid dimensions or rule parameter values."""


class InvalidDimension(ConfigurationError):
    """Grid created or resized with non-positive columns or rows."""

    def __init__(self, columns: int, rows: int):
        super().__init__(f"Grid dimensions must be positive, got {columns}x{rows}")
        self.columns = columns
        self.rows = rows
