"""Recorder — the capture entry point called from instrumented computations."""

from __future__ import annotations

import warnings
from collections.abc import Iterable

from ..models import Scenario, TraceAddress
from ..serializers import scenario_to_bytes
from ..storage import MemoryFileSystem, TraceStore
from .debug_config import DebugConfig
from .hooks import RecorderHook
from .selection import Decision, SelectionState, admit_anomaly, decide


class Recorder:
    """Owns the capture config, the worker's selection state and the trace store.

    Error-handling contract
    ----------------------
    - Configuration errors (invalid ``DebugConfig``) raise immediately.
    - Capture errors (marshaling or ``store.write()`` failures) are swallowed
      with ``warnings.warn`` and reported to hooks, so the host computation
      is never aborted by tracing infrastructure.
    """

    def __init__(
        self,
        config: DebugConfig | None = None,
        store: TraceStore | None = None,
        hooks: list[RecorderHook] | None = None,
    ) -> None:
        self.config = config or DebugConfig()
        self.store = store or TraceStore(MemoryFileSystem())
        self.hooks: list[RecorderHook] = hooks or []
        self.state = SelectionState()

    def should_capture(
        self, step_number: int, vertex_id: object, neighbor_ids: Iterable[object] = ()
    ) -> bool:
        """Apply the selection policy. An approval counts against ``max_captures``."""
        decision = decide(self.config, self.state, step_number, vertex_id, neighbor_ids)
        return decision == Decision.CAPTURE

    def capture(self, job_id: str, scenario: Scenario) -> TraceAddress | None:
        """Write ``scenario`` if the selection policy approves it.

        The step and vertex are taken from the scenario's context; its
        neighbors drive the ``debug_neighbors`` rule.
        """
        context = scenario.context
        if not self.should_capture(context.step_number, context.vertex_id, context.neighbor_ids):
            return None
        return self.record(job_id, scenario)

    def capture_exception(
        self, job_id: str, scenario: Scenario, exc: BaseException
    ) -> TraceAddress | None:
        """Record a fault raised by the user logic, within the anomaly ceiling."""
        if not self.config.capture_exceptions:
            return None
        scenario.set_exception(exc)
        return self._record_anomaly(job_id, scenario)

    def check_integrity(self, job_id: str, scenario: Scenario) -> list[str]:
        """Run the configured integrity checks; record the scenario on a violation.

        Returns a description of each violation found.
        """
        config = self.config
        context = scenario.context
        violations: list[str] = []
        if config.check_vertex_value_integrity and not config.is_vertex_value_correct(
            context.vertex_id, context.vertex_value_after
        ):
            violations.append(
                f"vertex {context.vertex_id} has incorrect value {context.vertex_value_after}"
            )
        if config.check_message_integrity:
            for out in context.outbound_messages:
                if not config.is_message_correct(
                    context.vertex_id, out.destination_id, out.message, context.step_number
                ):
                    violations.append(
                        f"message {out.message} from {context.vertex_id} "
                        f"to {out.destination_id} is incorrect"
                    )
        if violations:
            self._record_anomaly(job_id, scenario)
        return violations

    def record(self, job_id: str, scenario: Scenario) -> TraceAddress | None:
        """Marshal and write ``scenario`` without consulting the selection policy."""
        step_number = scenario.context.step_number
        vertex_id = str(scenario.context.vertex_id)
        try:
            address = self.store.write(job_id, step_number, vertex_id, scenario_to_bytes(scenario))
        except Exception as exc:
            warnings.warn(
                f"vertexreplay: failed to write trace of vertex {vertex_id} at step "
                f"{step_number} of job {job_id}: {exc}. Trace data has been dropped.",
                stacklevel=2,
            )
            for hook in self.hooks:
                try:
                    hook.on_capture_failed(job_id, step_number, vertex_id, exc)
                except Exception:
                    warnings.warn("vertexreplay: hook error in on_capture_failed", stacklevel=2)
            return None
        for hook in self.hooks:
            try:
                hook.on_trace_written(address)
            except Exception:
                warnings.warn("vertexreplay: hook error in on_trace_written", stacklevel=2)
        return address

    def _record_anomaly(self, job_id: str, scenario: Scenario) -> TraceAddress | None:
        if admit_anomaly(self.config, self.state):
            return self.record(job_id, scenario)
        step_number = scenario.context.step_number
        vertex_id = str(scenario.context.vertex_id)
        for hook in self.hooks:
            try:
                hook.on_anomaly_dropped(job_id, step_number, vertex_id)
            except Exception:
                warnings.warn("vertexreplay: hook error in on_anomaly_dropped", stacklevel=2)
        return None
