"""
Run longest-path searches over scenarios described in a YAML file.

Reads a config with a `search` section (engine settings) and a list of
`scenarios` (explicit edge lists or seeded random graphs), runs one search per
(scenario, start) pair and returns one result row per search.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from adjacency_list_graph import AdjacencyListGraph
from algorithms import LongestPathEngine
from edge_records import decode_edge_records
from errors import LongestPathError
from graph_generators import generate_random_graph
from longest_path_engine import (
    IterativeLongestPathEngine,
    RecursiveLongestPathEngine,
    default_engine,
)
from parallel import longest_simple_path_parallel

ENGINE_KINDS = ("auto", "recursive", "iterative")


@dataclass(frozen=True)
class SearchConfig:
    engine: str = "auto"
    reconstruct_path: bool = True
    max_depth: Optional[int] = None
    max_steps: Optional[int] = None
    parallel: bool = False
    max_workers: int = 4


@dataclass(frozen=True)
class RandomGraphConfig:
    node_count: int
    edge_probability: float
    max_weight: float = 10.0
    seed: Optional[int] = None


@dataclass(frozen=True)
class ScenarioConfig:
    name: str
    starts: Sequence[int] | str = (0,)
    node_count: Optional[int] = None
    edges: Sequence[Sequence[Any]] = ()
    random: Optional[RandomGraphConfig] = None
    destination: Optional[int] = None


@dataclass(frozen=True)
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    scenarios: Sequence[ScenarioConfig] = ()


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def _parse_search(data: Dict[str, Any]) -> SearchConfig:
    cfg = SearchConfig(
        engine=str(data.get("engine", "auto")),
        reconstruct_path=bool(data.get("reconstruct_path", True)),
        max_depth=_optional_int(data.get("max_depth")),
        max_steps=_optional_int(data.get("max_steps")),
        parallel=bool(data.get("parallel", False)),
        max_workers=int(data.get("max_workers", 4)),
    )
    if cfg.engine not in ENGINE_KINDS:
        raise ValueError(f"search.engine must be one of {ENGINE_KINDS}, got {cfg.engine!r}")
    return cfg


def _parse_scenario(data: Dict[str, Any]) -> ScenarioConfig:
    rnd = data.get("random")
    random_cfg = None
    if rnd is not None:
        random_cfg = RandomGraphConfig(
            node_count=int(rnd["node_count"]),
            edge_probability=float(rnd["edge_probability"]),
            max_weight=float(rnd.get("max_weight", 10.0)),
            seed=rnd.get("seed"),
        )
    elif data.get("node_count") is None:
        raise ValueError(f"scenario {data.get('name')!r} needs node_count/edges or random")

    starts = data.get("starts", [0])
    if starts != "all":
        starts = [int(s) for s in (starts if isinstance(starts, list) else [starts])]
    return ScenarioConfig(
        name=str(data["name"]),
        starts=starts,
        node_count=data.get("node_count"),
        edges=list(data.get("edges") or []),
        random=random_cfg,
        destination=_optional_int(data.get("destination")),
    )


def load_config(path: Path) -> Config:
    import yaml  # type: ignore

    data = yaml.safe_load(path.read_text()) or {}
    return Config(
        search=_parse_search(data.get("search") or {}),
        scenarios=[_parse_scenario(s) for s in data.get("scenarios") or []],
    )


def build_engine(cfg: SearchConfig, graph: AdjacencyListGraph) -> LongestPathEngine:
    """Engine for one scenario; 'auto' picks by graph size."""
    if cfg.engine == "recursive":
        return RecursiveLongestPathEngine(
            reconstruct_path=cfg.reconstruct_path, max_depth=cfg.max_depth, max_steps=cfg.max_steps
        )
    if cfg.engine == "iterative":
        return IterativeLongestPathEngine(reconstruct_path=cfg.reconstruct_path, max_steps=cfg.max_steps)
    return default_engine(
        graph, reconstruct_path=cfg.reconstruct_path, max_depth=cfg.max_depth, max_steps=cfg.max_steps
    )


def build_graph(scenario: ScenarioConfig) -> AdjacencyListGraph:
    if scenario.random is not None:
        rnd = scenario.random
        return generate_random_graph(
            rnd.node_count, rnd.edge_probability, max_weight=rnd.max_weight, seed=rnd.seed
        )
    # node_count is passed through unchecked; AdjacencyListGraph rejects bad values.
    return AdjacencyListGraph(scenario.node_count, decode_edge_records(scenario.edges))  # type: ignore[arg-type]


def run_scenario(scenario: ScenarioConfig, search: SearchConfig) -> List[Dict[str, object]]:
    """One row per start node. Failures become rows with an 'error' entry."""
    try:
        graph = build_graph(scenario)
    except (LongestPathError, ValueError) as exc:
        print(f"[search] failed scenario={scenario.name}: {exc}")
        return [{"scenario": scenario.name, "start": None, "error": str(exc)}]

    engine = build_engine(search, graph)
    starts = range(graph.node_count()) if scenario.starts == "all" else scenario.starts

    rows: List[Dict[str, object]] = []
    for start in starts:
        try:
            if search.parallel:
                result = longest_simple_path_parallel(
                    graph,
                    start,
                    engine,
                    destination=scenario.destination,
                    max_workers=search.max_workers,
                )
            else:
                result = engine.longest_simple_path_from(graph, start, destination=scenario.destination)
        except LongestPathError as exc:
            print(f"[search] failed scenario={scenario.name} start={start}: {exc}")
            rows.append({"scenario": scenario.name, "start": start, "error": str(exc)})
            continue

        rows.append(
            {
                "scenario": scenario.name,
                "start": start,
                "weight": result.weight,
                "path": list(result.path) if result.path is not None else None,
                "complete": result.complete,
                "nodes_entered": result.nodes_entered,
            }
        )
        print(
            f"[search] completed scenario={scenario.name} start={start} "
            f"weight={result.weight} nodes_entered={result.nodes_entered}"
        )
    return rows


def run_scenarios(config_path: Path) -> List[Dict[str, object]]:
    cfg = load_config(config_path)
    print(f"[search] queued {len(cfg.scenarios)} scenarios (engine={cfg.search.engine})")

    results: List[Dict[str, object]] = []
    for scenario in cfg.scenarios:
        results.extend(run_scenario(scenario, cfg.search))

    failed = sum(1 for row in results if "error" in row)
    print(f"[search] completed {len(results)} searches ({failed} failed)")
    return results
