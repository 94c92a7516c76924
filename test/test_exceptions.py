# test/test_exceptions.py
import pytest

from refcheck.core import (
    CoreError,
    InvalidArgument,
    InvalidTimeSeries,
    UnsupportedDtype,
    CodecError,
    VectorIOError,
    TypeMismatch,
    SizeMismatch,
    ConfigError,
    ChecksFailed,
)


def test_exception_inheritance_core():
    for exc in (InvalidArgument, InvalidTimeSeries, UnsupportedDtype, CodecError, ConfigError, ChecksFailed):
        assert issubclass(exc, CoreError)
    assert issubclass(InvalidTimeSeries, InvalidArgument)


def test_exception_inheritance_codec():
    for exc in (VectorIOError, TypeMismatch, SizeMismatch):
        assert issubclass(exc, CodecError)


def test_exceptions_behave_like_builtins():
    assert issubclass(InvalidArgument, ValueError)
    assert issubclass(UnsupportedDtype, TypeError)
    assert issubclass(VectorIOError, OSError)
    assert issubclass(TypeMismatch, TypeError)
    assert issubclass(SizeMismatch, ValueError)
    assert issubclass(ChecksFailed, AssertionError)


def test_codec_errors_can_be_caught_as_oserror():
    with pytest.raises(OSError):
        raise VectorIOError("x.bin")
