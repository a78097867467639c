"""Errors surfaced to callers of the analysis."""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    INVALID_INPUT_PATH = "invalid_input_path"
    INACCESSIBLE_PATH = "inaccessible_path"
    PROJECT_NOT_FOUND = "project_not_found"
    CONFIG_NOT_FOUND = "config_not_found"


class AnalysisError(Exception):
    """Input or project-loading failure.

    Only path validation and project loading raise this. Individual facts
    that cannot be resolved are skipped by the extractors instead.
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @classmethod
    def invalid_path(cls, path: str | Path) -> "AnalysisError":
        return cls(ErrorKind.INVALID_INPUT_PATH, f"Project path format is invalid: {path}")

    @classmethod
    def inaccessible(cls, path: str | Path) -> "AnalysisError":
        return cls(
            ErrorKind.INACCESSIBLE_PATH,
            f"Directory: {path} is not found or cannot be accessed by the app",
        )

    @classmethod
    def project_not_found(cls, path: str | Path) -> "AnalysisError":
        return cls(ErrorKind.PROJECT_NOT_FOUND, f"Directory: {path} could not be found")

    @classmethod
    def config_not_found(cls, path: str | Path, detail: str = "") -> "AnalysisError":
        message = f"Nest project is not found on path {path}"
        if detail:
            message = f"{message} ({detail})"
        return cls(ErrorKind.CONFIG_NOT_FOUND, message)

    @classmethod
    def settings_not_found(cls, path: str | Path) -> "AnalysisError":
        return cls(ErrorKind.CONFIG_NOT_FOUND, f"Settings file {path} could not be found")

    def __repr__(self) -> str:
        return f"AnalysisError({self.kind.value!r}, {self.message!r})"
