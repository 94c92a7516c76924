"""Load the ``[tool.refcheck]`` table from a project's ``pyproject.toml``."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np

from refcheck.core.dtypes import resolve_float_dtype
from refcheck.core.exceptions import ConfigError, UnsupportedDtype

logger = logging.getLogger(__name__)

_PROJECT_FILENAME = "pyproject.toml"
_TOOL_KEY = "refcheck"


@dataclass(frozen=True, slots=True)
class RefcheckConfig:
    """
    Settings for reference-data handling.

    - reference_dir: where `<name>.bin` reference vectors live
    - generate: write fresh references instead of loading stored ones
    - dtype: element type used when loading references
    """

    reference_dir: Path = field(default_factory=lambda: Path("reference_data"))
    generate: bool = False
    dtype: np.dtype = field(default_factory=lambda: np.dtype(np.float64))
    source: Path | None = None


def _resolve_pyproject_path(candidate: Path) -> Path:
    candidate = candidate.expanduser()
    if candidate.name == _PROJECT_FILENAME or candidate.suffix:
        return candidate
    return candidate / _PROJECT_FILENAME


def _parse_section(section: Mapping[str, Any], base_dir: Path, source: Path) -> RefcheckConfig:
    unknown = set(section) - {"reference_dir", "generate", "dtype"}
    if unknown:
        raise ConfigError(f"{source}: unknown [tool.{_TOOL_KEY}] keys: {sorted(unknown)}")

    raw_dir = section.get("reference_dir", "reference_data")
    if not isinstance(raw_dir, str) or not raw_dir.strip():
        raise ConfigError(f"{source}: reference_dir must be a non-empty string.")
    reference_dir = Path(raw_dir).expanduser()
    if not reference_dir.is_absolute():
        reference_dir = base_dir / reference_dir

    generate = section.get("generate", False)
    if not isinstance(generate, bool):
        raise ConfigError(f"{source}: generate must be a boolean.")

    try:
        dtype = resolve_float_dtype(section.get("dtype", "float64"))
    except UnsupportedDtype as e:
        raise ConfigError(f"{source}: {e}") from e

    return RefcheckConfig(
        reference_dir=reference_dir,
        generate=generate,
        dtype=dtype,
        source=source,
    )


def load_config(path: str | Path = ".") -> RefcheckConfig:
    """
    Read `[tool.refcheck]` from `path` (a pyproject.toml or its directory).

    A missing file or table yields the defaults, with `reference_dir`
    resolved against the directory that was searched.
    """
    pyproject = _resolve_pyproject_path(Path(path))
    base_dir = pyproject.parent.resolve(strict=False)

    if not pyproject.exists():
        logger.debug("no %s at %s, using defaults", _PROJECT_FILENAME, pyproject)
        return RefcheckConfig(reference_dir=base_dir / "reference_data")

    try:
        with pyproject.open("rb") as handle:
            payload = tomllib.load(handle)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{pyproject}: invalid TOML ({e})") from e

    tool = payload.get("tool")
    section = tool.get(_TOOL_KEY) if isinstance(tool, Mapping) else None
    if section is None:
        logger.debug("%s has no [tool.%s] table, using defaults", pyproject, _TOOL_KEY)
        return RefcheckConfig(reference_dir=base_dir / "reference_data", source=pyproject)
    if not isinstance(section, Mapping):
        raise ConfigError(f"{pyproject}: [tool.{_TOOL_KEY}] must be a table.")

    return _parse_section(section, base_dir, pyproject)
