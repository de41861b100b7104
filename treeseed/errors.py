"""Exceptions raised by the assignment optimizer."""


class InvalidConfiguration(ValueError):
    """Catalogs or parameters cannot be used to build an optimizer."""


class NotYetOptimized(RuntimeError):
    """Best mapping requested before any evaluation pass completed."""


class OracleUnavailable(RuntimeError):
    """Mutation oracle raised or produced an unusable score."""
