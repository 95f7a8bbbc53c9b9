"""Domain-layer exceptions."""


class HandInvariantError(Exception):
    """Raised when slot bookkeeping no longer matches token locations."""
