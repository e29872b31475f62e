"""Service-layer exceptions."""


class FatalGameError(Exception):
    """Authored content or configuration is inconsistent; the session cannot continue."""


class ContentError(FatalGameError):
    """Raised when chapter content cannot be traversed as authored."""


class ConfigurationError(FatalGameError):
    """Raised when a fixed game table has no entry for the requested key."""
