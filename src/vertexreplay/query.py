"""Read-side queries used by inspection and reproduction tooling."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .models import Scenario
from .serializers import scenario_from_bytes
from .storage import TraceStore
from .values import TypeRegistry


class ScenarioView(BaseModel):
    """Display projection of a scenario.

    ``outgoing_messages`` keeps one message per destination; when a vertex
    sent several messages to the same destination only the last is kept.
    Not suitable for reproduction.
    """

    model_config = ConfigDict(populate_by_name=True)

    vertex_id: str = Field(serialization_alias="vertexId")
    vertex_value: str | None = Field(serialization_alias="vertexValue")
    neighbors: list[str] = Field(default_factory=list)
    outgoing_messages: dict[str, str] = Field(
        default_factory=dict, serialization_alias="outgoingMessages"
    )


class TraceQuery:
    """Lists, loads and projects traces. Holds no per-call state."""

    def __init__(self, store: TraceStore, registry: TypeRegistry | None = None) -> None:
        self.store = store
        self.registry = registry or TypeRegistry()

    def list_vertices(self, job_id: str, step_number: int) -> set[str]:
        return self.store.list_vertices(job_id, step_number)

    def list_steps(self, job_id: str) -> list[int]:
        return sorted(self.store.list_steps(job_id))

    def load_scenario(self, job_id: str, step_number: int, vertex_id: str) -> Scenario:
        return scenario_from_bytes(self.store.read(job_id, step_number, vertex_id), self.registry)

    def project_for_display(self, scenario: Scenario) -> ScenarioView:
        return project_for_display(scenario)


def project_for_display(scenario: Scenario) -> ScenarioView:
    context = scenario.context
    value = context.vertex_value_after
    return ScenarioView(
        vertex_id=str(context.vertex_id),
        vertex_value=None if value is None else str(value),
        neighbors=[str(neighbor_id) for neighbor_id in context.neighbor_ids],
        outgoing_messages={
            str(out.destination_id): str(out.message) for out in context.outbound_messages
        },
    )
