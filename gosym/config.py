"""Configuration loading for bindgen (.bindgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .document import Dialect
from .errors import ConfigError

CONFIG_FILENAME = ".bindgen.yml"


@dataclass
class PackageEntry:
    """One package to generate during ``walk``.

    ``dir`` is relative to the walk root and defaults to ``path``;
    ``init`` defaults to :func:`init_suffix_for` of ``path``.
    """

    path: str
    dir: Optional[str] = None
    init: Optional[str] = None

    @property
    def directory(self) -> str:
        return self.dir or self.path

    @property
    def init_suffix(self) -> str:
        return self.init if self.init is not None else init_suffix_for(self.path)


@dataclass
class OutputConfig:
    """Where and how ``walk`` writes generated files."""

    package: str = "packages"
    directory: Optional[Path] = None


@dataclass
class BindgenConfig:
    """Represents the settings defined in .bindgen.yml."""

    root: Path
    exclude_symbols: List[str] = field(default_factory=list)
    strategy: str = "strict"
    format: str = "go"
    dialect: Dialect = field(default_factory=Dialect)
    output: OutputConfig = field(default_factory=OutputConfig)
    packages: List[PackageEntry] = field(default_factory=list)


def init_suffix_for(path: str) -> str:
    """CamelCase a package path into an init function suffix.

    ``encoding/json`` becomes ``EncodingJson`` and ``net/http/httptest``
    becomes ``NetHttpHttptest``.
    """
    parts = [p for p in path.replace("-", "/").replace(".", "/").replace("_", "/").split("/") if p]
    return "".join(p[:1].upper() + p[1:] for p in parts)


def load_config(config_path: Optional[Path] = None) -> BindgenConfig:
    """Load configuration from disk.

    ``config_path`` may name the file or the directory holding
    ``.bindgen.yml``.  A missing file yields the defaults.
    """
    config_file = _resolve_config_path(config_path or Path.cwd())
    root = config_file.parent.resolve()

    if not config_file.exists():
        return BindgenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    config = BindgenConfig(root=root)
    config.exclude_symbols = _as_str_list(data.get("exclude_symbols"), "exclude_symbols")
    config.strategy = _as_str(data.get("strategy"), "strategy") or config.strategy
    config.format = _as_str(data.get("format"), "format") or config.format

    dialect_data = _as_dict(data.get("dialect"), "dialect")
    if dialect_data:
        known = {f.name for f in fields(Dialect)}
        unknown = sorted(set(dialect_data) - known)
        if unknown:
            raise ConfigError(f"dialect: unknown key(s) {', '.join(unknown)}")
        values: Dict[str, Any] = {}
        for key, value in dialect_data.items():
            if key == "imports":
                values[key] = tuple(_as_str_list(value, "dialect.imports"))
            else:
                values[key] = _as_str(value, f"dialect.{key}")
        config.dialect = Dialect(**values)

    output_data = _as_dict(data.get("output"), "output")
    if output_data:
        directory = _as_str(output_data.get("directory"), "output.directory")
        config.output = OutputConfig(
            package=_as_str(output_data.get("package"), "output.package") or OutputConfig.package,
            directory=root / directory if directory else None,
        )

    packages = data.get("packages") or []
    if not isinstance(packages, list):
        raise ConfigError("packages must be a list")
    for index, item in enumerate(packages):
        if isinstance(item, str):
            config.packages.append(PackageEntry(path=item))
            continue
        entry = _as_dict(item, f"packages[{index}]")
        path = _as_str(entry.get("path"), f"packages[{index}].path")
        if not path:
            raise ConfigError(f"packages[{index}]: 'path' is required")
        config.packages.append(
            PackageEntry(
                path=path,
                dir=_as_str(entry.get("dir"), f"packages[{index}].dir"),
                init=_as_str(entry.get("init"), f"packages[{index}].init"),
            )
        )
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any, key: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key} must be a mapping")
    return value


def _as_str(value: Any, key: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{key} must be a string")
    return value


def _as_str_list(value: Any, key: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of strings")
    return list(value)
