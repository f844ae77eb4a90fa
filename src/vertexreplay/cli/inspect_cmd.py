"""Inspect subcommand implementation."""

from __future__ import annotations

import importlib
import json
import sys
from pathlib import Path
from typing import Literal

from ..exceptions import VertexReplayError
from ..query import TraceQuery
from ..renderers import render_scenario
from ..storage import LocalFileSystem, TraceStore
from ..values import TypeRegistry

VerbosityArg = Literal["minimal", "standard", "full"]


def run_inspect(
    trace_root: Path,
    job_id: str,
    step: int,
    vertex_id: str,
    verbosity: VerbosityArg,
    *,
    as_json: bool,
    output_path: Path | None,
    registry_ref: str | None = None,
) -> int:
    if output_path is not None and not as_json:
        raise ValueError("--output is only supported when --json is provided")
    if not trace_root.is_dir():
        print(f"Error: trace root not found: {trace_root}", file=sys.stderr)
        return 1

    try:
        registry = load_registry(registry_ref) if registry_ref else TypeRegistry()
        query = TraceQuery(TraceStore(LocalFileSystem(trace_root)), registry)
        scenario = query.load_scenario(job_id, step, vertex_id)
    except VertexReplayError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error reading trace: {exc}", file=sys.stderr)
        return 1

    if as_json:
        view = query.project_for_display(scenario)
        payload = json.dumps(view.model_dump(by_alias=True), ensure_ascii=True, sort_keys=True)
        if output_path is not None:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(payload + "\n", encoding="utf-8")
        else:
            print(payload)
        return 0

    print(f"Job: {job_id}")
    print(f"Step: {scenario.context.step_number}")
    print(f"Vertex: {scenario.context.vertex_id}")
    print(f"Computation: {scenario.computation_type}")
    print(f"Neighbors: {len(scenario.context.neighbors)}")
    print(f"Inbound messages: {len(scenario.context.inbound_messages)}")
    print(f"Outbound messages: {len(scenario.context.outbound_messages)}")
    print()
    print(render_scenario(scenario, verbosity=verbosity))
    return 0


def load_registry(ref: str) -> TypeRegistry:
    """Load a host-provided ``TypeRegistry`` given as ``module:attribute``."""
    module_name, _, attribute = ref.partition(":")
    if not module_name or not attribute:
        raise VertexReplayError(f"Registry reference must be 'module:attribute', got {ref!r}")
    try:
        registry = getattr(importlib.import_module(module_name), attribute)
    except (ImportError, AttributeError) as exc:
        raise VertexReplayError(f"Cannot load registry {ref!r}: {exc}") from exc
    if not isinstance(registry, TypeRegistry):
        raise VertexReplayError(f"{ref!r} is not a TypeRegistry")
    return registry
