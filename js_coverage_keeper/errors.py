"""Exceptions raised by js-coverage-keeper."""


class CoverageKeeperError(Exception):
    """Base class for coverage keeper errors."""


class ArgumentError(CoverageKeeperError, ValueError):
    """Invalid plugin options."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class ChannelNotAttachedError(CoverageKeeperError, RuntimeError):
    """A coverage operation ran before a script channel was supplied."""
