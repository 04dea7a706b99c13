"""CLI-specific exceptions."""


class CliError(Exception):
    """Base CLI error."""


class ConfigError(CliError):
    """Configuration file or value issues."""

    def __init__(self, message: str):
        super().__init__(message)


class ValidationError(CliError):
    """User input validation error."""

    def __init__(self, message: str):
        super().__init__(message)
