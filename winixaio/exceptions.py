"""Exceptions for Winix purifiers."""

from typing import Any


class WinixError(Exception):
    """Base error for WinixAIO."""

    def __init__(self, *args: Any) -> None:
        """Initialize the exception."""
        Exception.__init__(self, *args)


class DeviceCommunicationError(WinixError):
    """Remote call to the Winix api failed."""

    def __init__(self, *args: Any) -> None:
        """Initialize the exception."""
        WinixError.__init__(self, *args)


class LockTimeoutError(WinixError):
    """Timed out waiting for an in-flight device status fetch."""

    def __init__(self, *args: Any) -> None:
        """Initialize the exception."""
        WinixError.__init__(self, *args)


class ServiceCommunicationFailure(WinixError):
    """Failure reported to the automation host instead of a value."""

    def __init__(self, *args: Any) -> None:
        """Initialize the exception."""
        WinixError.__init__(self, *args)


class InvalidOptionError(WinixError):
    """Configured option has an invalid value."""

    def __init__(self, *args: Any) -> None:
        """Initialize the exception."""
        WinixError.__init__(self, *args)
