"""Service-layer exceptions."""


class FactoryError(Exception):
    """Raised when a runtime entity cannot be created."""


class CombatSetupError(Exception):
    """Raised when combat configuration is refused at setup."""
