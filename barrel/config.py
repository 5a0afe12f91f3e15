from __future__ import annotations

import json
from dataclasses import dataclass
from json import JSONDecodeError
from pathlib import Path
from typing import Any

from barrel.environment import Architecture

_KEYS = {"architecture", "binary_path", "skip_validation"}


@dataclass(frozen=True)
class EnvironmentConfig:
    architecture: Architecture | None = None
    binary_path: str | None = None
    # Testing only: validate() stops checking that the binary actually runs.
    skip_validation: bool = False


def _require_str(value: Any, *, what: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"'{what}' must be a non-empty string")
    return value


def _require_bool(value: Any, *, what: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"'{what}' must be a boolean if present")
    return value


def _normalize_top_level(obj: Any, path: Path) -> EnvironmentConfig:
    if obj is None:
        return EnvironmentConfig()
    if not isinstance(obj, dict):
        raise ValueError(f"{path}: config must be a table of settings")

    # TOML files may keep the settings under [barrel].
    section = obj.get("barrel")
    if isinstance(section, dict):
        extra_keys = set(obj.keys()) - {"barrel"}
        if extra_keys:
            extra = ", ".join(sorted(extra_keys))
            raise ValueError(f"{path}: when using [barrel], no other top-level keys are allowed (found: {extra}).")
        obj = section

    unknown = set(obj.keys()) - _KEYS
    if unknown:
        raise ValueError(f"{path}: unknown config keys: {', '.join(sorted(unknown))}")

    architecture = None
    raw_arch = obj.get("architecture")
    if raw_arch is not None:
        try:
            architecture = Architecture.parse(_require_str(raw_arch, what="architecture"))
        except ValueError as e:
            raise ValueError(f"{path}: {e}") from e

    binary_path = None
    if obj.get("binary_path") is not None:
        binary_path = _require_str(obj["binary_path"], what="binary_path")

    skip_validation = False
    if obj.get("skip_validation") is not None:
        skip_validation = _require_bool(obj["skip_validation"], what="skip_validation")

    return EnvironmentConfig(
        architecture=architecture,
        binary_path=binary_path,
        skip_validation=skip_validation,
    )


def _load_json(text: str, path: Path) -> Any:
    try:
        return json.loads(text)
    except JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in {path} at line {e.lineno}, column {e.colno}: {e.msg}"
        ) from e


def _load_toml(text: str, path: Path) -> Any:
    # TOML parsing is in stdlib as of Python 3.11; older interpreters get tomli.
    try:
        import tomllib  # type: ignore
    except ImportError:  # pragma: no cover
        import tomli as tomllib  # type: ignore
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {path}: {e}") from e


def _load_yaml(text: str, path: Path) -> Any:
    import yaml

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        if mark is not None and hasattr(mark, "line") and hasattr(mark, "column"):
            line = int(mark.line) + 1
            col = int(mark.column) + 1
            raise ValueError(f"Invalid YAML in {path} at line {line}, column {col}: {e}") from e
        raise ValueError(f"Invalid YAML in {path}: {e}") from e


def load_config_file(path: Path) -> EnvironmentConfig:
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()

    if suffix == ".json":
        raw = _load_json(text, path)
    elif suffix == ".toml":
        raw = _load_toml(text, path)
    elif suffix in (".yaml", ".yml"):
        raw = _load_yaml(text, path)
    else:
        raise ValueError(
            f"Unsupported config format for {path} (expected .json, .toml, .yaml, .yml)."
        )
    return _normalize_top_level(raw, path)
