"""Core exceptions."""


class DataAccessError(Exception):
    """Raised by a candidate source when the backing store cannot be read."""
