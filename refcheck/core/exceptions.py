# refcheck/core/exceptions.py
from __future__ import annotations


class CoreError(Exception):
    """Base error for all refcheck exceptions."""


# ---- Precondition errors (programmer / data-setup mistakes) ----
class InvalidArgument(CoreError, ValueError):
    """Raised when a hard precondition on the inputs is violated."""


class InvalidTimeSeries(InvalidArgument):
    """Raised when a TimeSeries is constructed with invalid inputs."""


class UnsupportedDtype(CoreError, TypeError):
    """Raised when a series is not float32/float64 (or not serializable)."""


# ---- Codec errors ----
class CodecError(CoreError):
    """Base error for binary vector serialization failures."""


class VectorIOError(CodecError, OSError):
    """Raised when a vector file cannot be opened, written or fully read."""


class TypeMismatch(CodecError, TypeError):
    """Raised when the stored type tag differs from the requested dtype."""


class SizeMismatch(CodecError, ValueError):
    """Raised when the stored element size differs from the requested dtype."""


# ---- Ambient errors ----
class ConfigError(CoreError, ValueError):
    """Raised when the [tool.refcheck] configuration is malformed."""


class ChecksFailed(CoreError, AssertionError):
    """Raised by CheckSuite.raise_on_failure() when any expectation failed."""
