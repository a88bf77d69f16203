"""Exceptions raised by the streaming Brainfuck machine."""


class BrainfuckError(Exception):
    """Base class for every error the machine raises."""


class UnmatchedLoopError(BrainfuckError, SyntaxError):
    """A ']' arrived with no open loop (or a '[' was never closed)."""

    def __init__(self, message, position=None):
        super().__init__(message)
        self.position = position


class StepLimitExceeded(BrainfuckError):
    """Raised once a run executes more operations than its step limit."""

    def __init__(self, limit: int):
        super().__init__(f"Execution stopped after {limit} steps (possible infinite loop)")
        self.limit = limit


class TapeBoundsError(BrainfuckError, IndexError):
    """A bounded tape was accessed outside its cells."""


class EndOfInput(BrainfuckError):
    """Input ran dry during ','; drivers treat this as normal completion."""


class ConfigError(BrainfuckError, ValueError):
    """Invalid machine configuration."""
