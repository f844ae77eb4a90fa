"""Selection policy deciding which (step, vertex) pairs are captured."""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from .debug_config import DebugConfig


class Decision(StrEnum):
    CAPTURE = "capture"
    SKIP = "skip"


class SelectionState:
    """Process-local counters owned by one worker.

    Ceilings are enforced per worker, so a cluster-wide total may exceed the
    configured maximum by up to the number of workers.
    """

    __slots__ = ("anomalies", "anomalies_dropped", "captures", "_sample_step", "_sampled")

    def __init__(self) -> None:
        self.captures = 0
        self.anomalies = 0
        self.anomalies_dropped = 0
        self._sample_step: int | None = None
        self._sampled: set[str] = set()

    def sample(self, step_number: int, vertex_id: str, limit: int) -> bool:
        """Admit up to ``limit`` distinct vertices per step, reselecting each step."""
        if step_number != self._sample_step:
            self._sample_step = step_number
            self._sampled = set()
        if vertex_id in self._sampled:
            return True
        if len(self._sampled) >= limit:
            return False
        self._sampled.add(vertex_id)
        return True


def decide(
    config: DebugConfig,
    state: SelectionState,
    step_number: int,
    vertex_id: object,
    neighbor_ids: Iterable[object] = (),
) -> Decision:
    """Decide whether to capture a vertex; rules apply in order, first match wins.

    1. capture ceiling reached -> SKIP
    2. step allow-list configured and step absent -> SKIP
    3. vertex allow-list configured -> CAPTURE listed vertices (and their
       neighbors when ``debug_neighbors``), SKIP the rest
    4. random sampling configured -> CAPTURE up to R vertices per step
    5. otherwise CAPTURE everything
    """
    if state.captures >= config.max_captures:
        return Decision.SKIP
    if config.steps_to_debug is not None and step_number not in config.steps_to_debug:
        return Decision.SKIP

    key = str(vertex_id)
    targets = config.vertices_to_debug
    if targets is not None:
        selected = key in targets or (
            config.debug_neighbors and any(str(other) in targets for other in neighbor_ids)
        )
    elif config.num_random_vertices is not None:
        selected = state.sample(step_number, key, config.num_random_vertices)
    else:
        selected = True

    if not selected:
        return Decision.SKIP
    state.captures += 1
    return Decision.CAPTURE


def admit_anomaly(config: DebugConfig, state: SelectionState) -> bool:
    """Count an anomaly and report whether it may be persisted."""
    if state.anomalies >= config.max_anomaly_reports:
        state.anomalies_dropped += 1
        return False
    state.anomalies += 1
    return True
