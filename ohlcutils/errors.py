"""
Error types and the typed result returned by the soft-failing operators
"""


class OhlcUtilsError(Exception):
    """Base class for all ohlcutils errors"""


class InvalidArgument(OhlcUtilsError, ValueError):
    """Fatal structural error: the operation can't possibly proceed"""


class TypeMismatch(OhlcUtilsError, TypeError):
    """
    Soft error: one input was of the wrong kind and can be skipped

    Never raised by lag()/diff() themselves, it travels inside an OpResult.
    """

    def __init__(self, message, arg_name=None):
        super().__init__(message)
        self.arg_name = arg_name


class DataUnavailable(OhlcUtilsError, LookupError):
    """A provider returned no data for a symbol"""


class OpResult:
    """
    Outcome of a soft-failing operation

    Exactly one of value/error is set. Callers branch on .ok, or call
    .unwrap() to get the value and raise the error otherwise.
    """

    __slots__ = ('value', 'error')

    def __init__(self, value=None, error=None):
        if (value is None) == (error is None):
            raise InvalidArgument("OpResult needs exactly one of value or error")
        self.value = value
        self.error = error

    @classmethod
    def success(cls, value):
        return cls(value=value)

    @classmethod
    def failure(cls, error):
        return cls(error=error)

    @property
    def ok(self):
        return self.error is None

    def unwrap(self):
        if self.error is not None:
            raise self.error
        return self.value

    def __repr__(self):
        if self.ok:
            return f"OpResult(value=<{type(self.value).__name__} {getattr(self.value, 'shape', '')}>)"
        return f"OpResult(error={self.error!r})"
