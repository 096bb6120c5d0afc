class FactorialError(Exception):
    """Base exception for memo-factorial."""
    pass


class ConfigurationError(FactorialError):
    """Errors related to configuration."""
    pass


class NumericTypeError(ConfigurationError):
    """A numeric type that is unknown or not integral was requested."""
    pass


class ArgumentError(FactorialError):
    """A command line value could not be turned into an integer."""

    def __init__(self, position: int, text: str, message: str):
        super().__init__(message)
        self.position = position
        self.text = text


class ArgumentSyntaxError(ArgumentError):
    """The value is not written as an integer."""
    pass


class ArgumentRangeError(ArgumentError):
    """The value is an integer but does not fit the parse type."""
    pass


class ComputationError(FactorialError):
    """Errors raised when unwrapping a failed factorial result."""
    pass


class NegativeInputError(ComputationError):
    """Factorial was requested for a negative number."""
    pass


class FactorialOverflowError(ComputationError):
    """The factorial does not fit the output type."""
    pass
