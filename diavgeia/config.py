"""Central configuration for decision publishing."""

import os
from dataclasses import dataclass, field
from pathlib import Path

# Paths
PROJECT_ROOT = Path(__file__).parent.parent
OUTPUT_DIR = PROJECT_ROOT / "output"
DATA_DIR = PROJECT_ROOT / "data"

# Triple store defaults
DEFAULT_LOADER = "s-post"
DEFAULT_SPARQL_ENDPOINT = "http://localhost:3030"
DEFAULT_DATASET = "diavgeia"
DEFAULT_GRAPH = "default"
LOADER_TIMEOUT_SECONDS = 120.0
LOADER_RETRIES = 2


def _env_path(name: str, default: Path) -> Path:
    return Path(os.environ.get(name, str(default))).expanduser()


def _optional_env_path(name: str) -> Path | None:
    value = os.environ.get(name, "")
    return Path(value).expanduser() if value else None


@dataclass(frozen=True)
class PublisherConfig:
    """Configuration for publishing decisions to disk and the triple store."""

    decisions_dir: Path = field(
        default_factory=lambda: _env_path("DIAVGEIA_DECISIONS_DIR", OUTPUT_DIR / "decisions")
    )
    index_path: Path = field(
        default_factory=lambda: _env_path("DIAVGEIA_INDEX_PATH", DATA_DIR / "decisions.jsonl")
    )
    errors_path: Path = field(
        default_factory=lambda: _env_path("DIAVGEIA_ERRORS_PATH", DATA_DIR / "errors.jsonl")
    )
    loader_executable: str = field(
        default_factory=lambda: os.environ.get("DIAVGEIA_LOADER", DEFAULT_LOADER)
    )
    sparql_endpoint_url: str = field(
        default_factory=lambda: os.environ.get("DIAVGEIA_SPARQL_ENDPOINT", DEFAULT_SPARQL_ENDPOINT)
    )
    dataset: str = field(default_factory=lambda: os.environ.get("DIAVGEIA_DATASET", DEFAULT_DATASET))
    graph: str = field(default_factory=lambda: os.environ.get("DIAVGEIA_GRAPH", DEFAULT_GRAPH))
    loader_timeout: float = field(
        default_factory=lambda: float(os.environ.get("DIAVGEIA_LOADER_TIMEOUT", str(LOADER_TIMEOUT_SECONDS)))
    )
    loader_retries: int = field(
        default_factory=lambda: int(os.environ.get("DIAVGEIA_LOADER_RETRIES", str(LOADER_RETRIES)))
    )
    municipalities_file: Path | None = field(
        default_factory=lambda: _optional_env_path("DIAVGEIA_MUNICIPALITIES_FILE")
    )
    benchmark: bool = False

    @property
    def dataset_url(self) -> str:
        return f"{self.sparql_endpoint_url.rstrip('/')}/{self.dataset}"
