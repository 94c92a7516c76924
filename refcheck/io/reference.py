from __future__ import annotations

import logging
import re
from pathlib import Path

import numpy as np

from refcheck.core.dtypes import SeriesLike, as_float_array, resolve_float_dtype
from refcheck.core.exceptions import InvalidArgument
from refcheck.io.codec import load_vector, save_vector
from refcheck.io.config import RefcheckConfig

logger = logging.getLogger(__name__)

_SUFFIX = ".bin"
_NAME_RE = re.compile(r"^[A-Za-z0-9_.\-]+$")


class ReferenceStore:
    """Directory of named reference vectors (`<name>.bin`).

    In *generate* mode, `reference()` derives the reference from the current
    run (values + offset) and persists it. Otherwise it loads the stored
    vector, so later runs are checked against the data captured once.
    """

    def __init__(self, directory: str | Path, *, generate: bool = False):
        self._directory = Path(directory)
        self._generate = bool(generate)

    @classmethod
    def from_config(cls, config: RefcheckConfig) -> "ReferenceStore":
        return cls(config.reference_dir, generate=config.generate)

    def __repr__(self) -> str:
        return f"ReferenceStore({str(self._directory)!r}, generate={self._generate})"

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def generate(self) -> bool:
        return self._generate

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------
    def path_for(self, name: str) -> Path:
        if not isinstance(name, str) or not _NAME_RE.match(name):
            raise InvalidArgument(
                f"Reference name must be a non-empty file-safe string, got {name!r}"
            )
        return self._directory / f"{name}{_SUFFIX}"

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def names(self) -> list[str]:
        """Sorted names of the references currently stored."""
        if not self._directory.is_dir():
            return []
        return sorted(p.stem for p in self._directory.glob(f"*{_SUFFIX}") if p.is_file())

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def save(self, name: str, vector: SeriesLike) -> Path:
        arr = as_float_array(vector, name=name)
        path = self.path_for(name)
        self._directory.mkdir(parents=True, exist_ok=True)
        save_vector(arr, path)
        logger.debug("stored reference %r (%d x %s)", name, arr.size, arr.dtype)
        return path

    def load(self, name: str, dtype: object = np.float64) -> np.ndarray:
        return load_vector(self.path_for(name), resolve_float_dtype(dtype))

    def reference(
        self,
        name: str,
        values: SeriesLike,
        offset: float = 0.0,
    ) -> np.ndarray:
        """
        Return the reference vector called `name`.

        generate=True : store and return `values + offset`
        generate=False: load the stored vector (dtype taken from `values`)
        """
        arr = as_float_array(values, name=name)
        if not self._generate:
            return self.load(name, arr.dtype)

        adjusted = arr + arr.dtype.type(offset)
        self.save(name, adjusted)
        logger.info("generated reference %r at %s", name, self.path_for(name))
        return adjusted
