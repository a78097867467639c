"""Configuration for a queuegraph analysis run."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .errors import AnalysisError

PROJECT_CONFIG_NAMES = (".queuegraph.yml", ".queuegraph.yaml", ".queuegraph.json")


@dataclass(slots=True)
class AnalyzerConfig:
    """Settings that decide what counts as a listener or a sender.

    Attributes
    ----------
    route_marker:
        Decorator name that marks a method as a queue listener. Matched
        exactly against the decorator's name.
    service_type:
        Declared type of the object whose ``send_method`` dispatches a
        message. Matched exactly against the annotation text.
    send_method:
        Method name invoked on ``service_type`` instances to publish.
    project_file:
        File that must exist at the project root for it to be analysed.
    source_globs:
        Glob patterns, relative to the project root, selecting source files.
    exclude_dirs:
        Directory names skipped anywhere below the root.
    workers:
        Number of threads used for per-file extraction. ``1`` runs inline.
    """

    route_marker: str = "RMQRoute"
    service_type: str = "RMQService"
    send_method: str = "send"
    project_file: str = "tsconfig.json"
    source_globs: List[str] = field(default_factory=lambda: ["src/**/*.ts"])
    exclude_dirs: List[str] = field(default_factory=lambda: ["node_modules", "dist"])
    workers: int = 1

    def __post_init__(self) -> None:
        if isinstance(self.workers, bool) or not isinstance(self.workers, int):
            raise ValueError(f"workers must be an integer, got {self.workers!r}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if not self.route_marker or not self.service_type or not self.send_method:
            raise ValueError("route_marker, service_type and send_method must be non-empty")

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "AnalyzerConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def load_config(path: Path) -> AnalyzerConfig:
    """Read an :class:`AnalyzerConfig` from a YAML or JSON file.

    Parameters
    ----------
    path:
        Settings file. ``.json`` files are parsed as JSON, anything else as
        YAML (which also accepts JSON).

    Returns
    -------
    The parsed configuration; an empty file yields the defaults.
    """
    if not path.is_file():
        raise AnalysisError.settings_not_found(path)

    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ValueError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        return AnalyzerConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {path} must be a mapping")
    return AnalyzerConfig.from_mapping(data)


def resolve_config(root: Path, explicit: Path | None = None) -> AnalyzerConfig:
    """Pick the configuration for ``root``.

    An explicit file wins, then a project-level ``.queuegraph.yml`` (or
    ``.yaml``/``.json``), then the defaults.
    """
    if explicit is not None:
        return load_config(explicit)
    for name in PROJECT_CONFIG_NAMES:
        candidate = root / name
        if candidate.is_file():
            return load_config(candidate)
    return AnalyzerConfig()


DEFAULT_CONFIG = AnalyzerConfig()
