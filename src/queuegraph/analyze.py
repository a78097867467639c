"""End-to-end analysis of a project and the outcomes presented to callers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .ast.loader import load_project, validate_root
from .config import AnalyzerConfig, resolve_config
from .errors import AnalysisError, ErrorKind
from .extract.pipeline import extract_records
from .graph.builder import build_graph
from .graph.model import GraphData
from .log import get_logger

logger = get_logger(__name__)


def analyze(
    root: str | Path,
    config: AnalyzerConfig | None = None,
    *,
    config_path: Path | None = None,
) -> GraphData:
    """Analyse the project at ``root`` and return its queue graph.

    Parameters
    ----------
    root:
        Absolute path of the project root. Validated before anything is read.
    config:
        Analyzer settings. When omitted they are read from ``config_path``
        or the project's ``.queuegraph.yml``, falling back to defaults.
    config_path:
        Explicit settings file, ignored when ``config`` is given.

    Raises
    ------
    AnalysisError
        For invalid or inaccessible paths and missing project metadata.
    """
    path = validate_root(root)
    active = config or resolve_config(path, config_path)
    files = load_project(path, active)
    records = extract_records(files, active)
    graph = build_graph(records)
    logger.info(
        "Built graph for %s: %d nodes, %d links",
        path,
        len(graph.nodes),
        len(graph.links),
    )
    return graph


class OutcomeState(str, Enum):
    NO_INPUT = "no_input"
    INVALID_PATH = "invalid_path"
    INACCESSIBLE = "inaccessible"
    PROJECT_ERROR = "project_error"
    EMPTY = "empty"
    GRAPH = "graph"


_STATE_BY_KIND = {
    ErrorKind.INVALID_INPUT_PATH: OutcomeState.INVALID_PATH,
    ErrorKind.INACCESSIBLE_PATH: OutcomeState.INACCESSIBLE,
    ErrorKind.PROJECT_NOT_FOUND: OutcomeState.PROJECT_ERROR,
    ErrorKind.CONFIG_NOT_FOUND: OutcomeState.PROJECT_ERROR,
}


@dataclass(frozen=True, slots=True)
class AnalysisOutcome:
    """What a caller should show for one analysis request."""

    state: OutcomeState
    message: str
    graph: Optional[GraphData] = None

    @property
    def succeeded(self) -> bool:
        return self.state in (OutcomeState.EMPTY, OutcomeState.GRAPH)


def run_analysis(
    raw_input: Optional[str],
    config: AnalyzerConfig | None = None,
    *,
    config_path: Path | None = None,
) -> AnalysisOutcome:
    """Analyse ``raw_input`` and classify the result for presentation.

    Missing input, an invalid path, an inaccessible path and an empty result
    are reported as distinct states; only the analysis errors listed in
    :class:`~queuegraph.errors.ErrorKind` are turned into outcomes.
    """
    if raw_input is None or not raw_input.strip():
        return AnalysisOutcome(OutcomeState.NO_INPUT, "Input is empty!")

    try:
        graph = analyze(raw_input.strip(), config, config_path=config_path)
    except AnalysisError as exc:
        logger.debug("Analysis of %s failed: %r", raw_input, exc)
        return AnalysisOutcome(_STATE_BY_KIND[exc.kind], exc.message)

    if graph.is_empty:
        return AnalysisOutcome(OutcomeState.EMPTY, "No data found", graph)
    return AnalysisOutcome(
        OutcomeState.GRAPH,
        f"Found {len(graph.nodes)} endpoints and {len(graph.links)} links",
        graph,
    )
