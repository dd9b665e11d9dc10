# errors.py
"""Exception hierarchy shared by the recalc modules."""


class CalculatorError(Exception):
    """Base class for calculator errors."""
    pass

class ParseError(CalculatorError):
    """Raised for parsing errors with optional position information."""

    def __init__(self, message: str, pos: int = -1):
        super().__init__(message)
        self.message = message
        self.pos = pos

class LexerError(ParseError):
    """Raised for errors during tokenization."""
    pass

class ConfigError(CalculatorError):
    """Raised when settings from the environment or command line are invalid."""
    pass
