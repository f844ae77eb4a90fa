"""List subcommand implementation."""

from __future__ import annotations

import json
import sys
from pathlib import Path

from ..exceptions import JobNotFoundError
from ..storage import LocalFileSystem, TraceStore


def run_list(trace_root: Path, job_id: str | None, step: int | None, *, as_json: bool) -> int:
    if step is not None and job_id is None:
        raise ValueError("--step requires a job id")
    if not trace_root.is_dir():
        print(f"Error: trace root not found: {trace_root}", file=sys.stderr)
        return 1

    store = TraceStore(LocalFileSystem(trace_root))
    entries: list[str]
    try:
        if job_id is None:
            entries = store.list_jobs()
        elif step is None:
            entries = [str(s) for s in sorted(store.list_steps(job_id))]
        else:
            entries = sorted(store.list_vertices(job_id, step), key=_vertex_sort_key)
    except JobNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error reading trace store: {exc}", file=sys.stderr)
        return 1

    if as_json:
        print(json.dumps(entries, ensure_ascii=True))
        return 0
    for entry in entries:
        print(entry)
    return 0


def _vertex_sort_key(vertex_id: str) -> tuple[int, int, str]:
    if vertex_id.lstrip("-").isdigit():
        return (0, int(vertex_id), "")
    return (1, 0, vertex_id)
