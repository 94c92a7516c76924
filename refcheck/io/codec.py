"""Self-describing binary container for a single numeric vector.

Layout (header integers are unsigned 64-bit little-endian):

    tag_length | tag (ASCII dtype name) | element_size | element_count | payload

The payload is ``element_count * element_size`` bytes of little-endian
element data. The tag is the numpy dtype name (``float32``, ``float64``,
...), checked against the requested dtype on load.
"""

from __future__ import annotations

import logging
import os
import struct
from pathlib import Path
from typing import Union

import numpy as np

from refcheck.core.exceptions import (
    InvalidArgument,
    SizeMismatch,
    TypeMismatch,
    UnsupportedDtype,
    VectorIOError,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

_U64 = struct.Struct("<Q")


def _serializable_dtype(dtype: object) -> np.dtype:
    try:
        resolved = np.dtype(dtype)
    except TypeError as e:
        raise UnsupportedDtype(f"not a numpy dtype: {dtype!r}") from e
    if resolved.hasobject or resolved.fields is not None or resolved.itemsize == 0:
        raise UnsupportedDtype(
            f"only fixed-size scalar dtypes can be serialized, got {resolved}"
        )
    return resolved


def _type_tag(dtype: np.dtype) -> bytes:
    return dtype.name.encode("ascii")


def encode_vector(vector: np.ndarray) -> bytes:
    """Serialize a 1D array into a self-describing blob."""
    arr = np.asarray(vector)
    if arr.ndim != 1:
        raise InvalidArgument(f"`vector` must be 1D, got shape {arr.shape}")
    dtype = _serializable_dtype(arr.dtype)
    tag = _type_tag(dtype)

    header = b"".join(
        (
            _U64.pack(len(tag)),
            tag,
            _U64.pack(dtype.itemsize),
            _U64.pack(arr.size),
        )
    )
    payload = np.ascontiguousarray(arr, dtype=dtype.newbyteorder("<")).tobytes()
    return header + payload


class _Reader:
    """Sequential reader over a blob that reports truncation."""

    __slots__ = ("_blob", "_pos", "_source")

    def __init__(self, blob: bytes, source: str) -> None:
        self._blob = memoryview(blob)
        self._pos = 0
        self._source = source

    def take(self, n: int, what: str) -> memoryview:
        end = self._pos + n
        if end > len(self._blob):
            raise VectorIOError(
                f"Error reading from {self._source}: truncated {what} "
                f"(need {n} bytes at offset {self._pos}, have {len(self._blob) - self._pos})"
            )
        chunk = self._blob[self._pos:end]
        self._pos = end
        return chunk

    def u64(self, what: str) -> int:
        return _U64.unpack(self.take(_U64.size, what))[0]

    @property
    def remaining(self) -> int:
        return len(self._blob) - self._pos


def decode_vector(
    blob: bytes,
    dtype: object = np.float64,
    *,
    source: str = "<bytes>",
) -> np.ndarray:
    """
    Deserialize a blob produced by encode_vector().

    Raises
    ------
    TypeMismatch
        If the stored tag is not the requested dtype.
    SizeMismatch
        If the stored element size differs from the requested dtype's size.
    VectorIOError
        If the blob is truncated.
    """
    requested = _serializable_dtype(dtype)
    reader = _Reader(blob, source)

    tag_length = reader.u64("type tag length")
    stored_tag = bytes(reader.take(tag_length, "type tag"))
    if stored_tag != _type_tag(requested):
        raise TypeMismatch(
            f"Type mismatch: {source} contains {stored_tag.decode('ascii', 'replace')}, "
            f"requested {requested.name}"
        )

    element_size = reader.u64("element size")
    if element_size != requested.itemsize:
        raise SizeMismatch(
            f"Element size mismatch: {source} stores {element_size} bytes per element, "
            f"{requested.name} needs {requested.itemsize}"
        )

    count = reader.u64("element count")
    payload = reader.take(count * element_size, "payload")
    if reader.remaining:
        logger.debug("%s: ignoring %d trailing bytes", source, reader.remaining)

    if count == 0:
        return np.empty(0, dtype=requested)
    out = np.frombuffer(payload, dtype=requested.newbyteorder("<"), count=count)
    return out.astype(requested, copy=True)


def save_vector(vector: np.ndarray, path: PathLike) -> Path:
    """
    Write `vector` to `path` (overwriting it).

    Raises
    ------
    VectorIOError
        If the file cannot be opened or written.
    UnsupportedDtype
        If the element type is not a fixed-size scalar dtype.
    InvalidArgument
        If `vector` is not 1D.
    """
    blob = encode_vector(vector)
    p = Path(path)
    try:
        with p.open("wb") as handle:
            handle.write(blob)
    except OSError as e:
        raise VectorIOError(f"Error writing to file: {p}") from e

    logger.debug("saved %d bytes to %s", len(blob), p)
    return p


def load_vector(path: PathLike, dtype: object = np.float64) -> np.ndarray:
    """
    Read a vector written by save_vector().

    Raises
    ------
    VectorIOError
        If the file cannot be opened or is truncated.
    TypeMismatch, SizeMismatch
        If the stored element type does not match `dtype`.
    """
    p = Path(path)
    try:
        with p.open("rb") as handle:
            blob = handle.read()
    except OSError as e:
        raise VectorIOError(f"Failed to open file for reading: {p}") from e

    out = decode_vector(blob, dtype, source=str(p))
    logger.debug("loaded %d x %s from %s", out.size, out.dtype, p)
    return out
