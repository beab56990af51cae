"""Constants for the tonkit CLI."""


class ExitCode:
    """Exit codes for CLI operations."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFIG_ERROR = 3


class Icons:
    """Unicode icons for CLI output."""

    ERROR = "✗"


LOGGING_PACKAGES = ("tonkit", "tonkit_cli")
