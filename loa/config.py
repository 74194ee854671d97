from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import numpy as np
import yaml

from loa.core import DEFAULT_MOVE_LIMIT
from loa.heuristics import Evaluator, HeuristicWeights
from loa.search import SearchConfig, SearchEngine

logger = logging.getLogger(__name__)


@dataclass
class EngineConfig:
    move_limit: int = DEFAULT_MOVE_LIMIT
    seed: Optional[int] = None
    search: SearchConfig = field(default_factory=SearchConfig)
    weights: HeuristicWeights = field(default_factory=HeuristicWeights)

    def build_engine(self, seed: Optional[int] = None) -> SearchEngine:
        rng = np.random.default_rng(self.seed if seed is None else seed)
        return SearchEngine(Evaluator(self.weights), config=self.search, rng=rng)


def config_from_dict(data: Optional[Mapping[str, Any]]) -> EngineConfig:
    values: Dict[str, Any] = dict(data or {})
    search = _build_section(SearchConfig, values.pop("search", None), "search")
    weights = _build_section(HeuristicWeights, values.pop("weights", None), "weights")
    top_level = {f.name for f in fields(EngineConfig)} - {"search", "weights"}
    unknown = set(values) - top_level
    if unknown:
        raise ValueError(f"Unknown config keys: {sorted(unknown)}")
    return EngineConfig(search=search, weights=weights, **values)


def load_config(path: Union[str, Path]) -> EngineConfig:
    path = Path(path)
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    logger.debug("Loaded config from %s", path)
    return config_from_dict(data)


def _build_section(cls, values: Optional[Mapping[str, Any]], section: str):
    values = dict(values or {})
    known = {f.name for f in fields(cls)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f"Unknown keys in '{section}': {sorted(unknown)}")
    return cls(**values)
