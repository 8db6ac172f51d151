"""Utilities for loading the pipeline settings defined in YAML."""
from __future__ import annotations

from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import yaml


_SETTINGS_PATH = Path(__file__).resolve().parent / "settings.yaml"


@dataclass(frozen=True)
class PipelineConfig:
    """Knobs consumed by the pruning and filtering stages."""

    min_component_size: int = 5
    coefficient_threshold: float = 0.3
    input_path: str = "amazon_cleaned.csv"
    output_path: str = "graph.dot"

    def __post_init__(self) -> None:
        if int(self.min_component_size) < 1:
            raise ValueError(
                f"min_component_size must be a positive integer (got {self.min_component_size!r})"
            )
        if not 0.0 <= float(self.coefficient_threshold) <= 1.0:
            raise ValueError(
                f"coefficient_threshold must lie in [0, 1] (got {self.coefficient_threshold!r})"
            )

    def override(self, **changes: Any) -> "PipelineConfig":
        """Return a copy with every non-``None`` value in ``changes`` applied."""

        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")
    with path.open("r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Settings file {path} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")
    return data


@lru_cache(maxsize=1)
def _load_default_settings() -> Dict[str, Any]:
    return _read_yaml(_SETTINGS_PATH)


def _resolve(data: Dict[str, Any], path: Sequence[str], default: Any) -> Any:
    node: Any = data
    for key in path:
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node


def load_settings(path: Optional[str | Path] = None) -> PipelineConfig:
    """Return the :class:`PipelineConfig` described by ``path``.

    When ``path`` is omitted the bundled :mod:`settings.yaml` is used.
    Missing keys fall back to the dataclass defaults.
    """

    data = _load_default_settings() if path is None else _read_yaml(Path(path))
    base = PipelineConfig()
    return PipelineConfig(
        min_component_size=int(
            _resolve(data, ["pruning", "min_component_size"], base.min_component_size)
        ),
        coefficient_threshold=float(
            _resolve(data, ["filter", "coefficient_threshold"], base.coefficient_threshold)
        ),
        input_path=str(_resolve(data, ["io", "input_path"], base.input_path)),
        output_path=str(_resolve(data, ["io", "output_path"], base.output_path)),
    )
