"""Exception types shared across hookwright."""


class HookwrightError(Exception):
    """Base class for hookwright errors."""


class NotARepositoryError(HookwrightError):
    """Raised when no git metadata is found in the current or parent directories."""


class InvalidCommandArgsError(HookwrightError):
    """Raised when a command would have to be run through a shell pipeline."""


class CommandCancelledError(HookwrightError):
    """Raised when a running command was cancelled by the caller."""

    def __init__(self, args: list[str]):
        self.command = list(args)
        super().__init__(f"Cancelled: {' '.join(self.command)}")


class ConfigLoadError(HookwrightError):
    """Raised when a configuration file cannot be loaded."""


class ConfigValidationError(HookwrightError):
    """Raised when configuration validation fails."""


class UnknownHookError(HookwrightError):
    """Raised when a hook name is not registered for a hook type."""


class InvalidHookResultError(HookwrightError):
    """Raised when a hook's run() returns something that is not an outcome."""
