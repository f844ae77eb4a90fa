"""Capture a few vertices of a connected-components run and inspect them afterwards."""

from __future__ import annotations

import tempfile
from collections.abc import Iterable

from vertexreplay import DebugConfig, LocalFileSystem, Recorder, Scenario, TraceQuery, TraceStore
from vertexreplay.renderers import render_scenario
from vertexreplay.values import IntValue, NullValue, TypeRegistry

EDGES = {1: [2], 2: [1, 3], 3: [2], 4: [5], 5: [4]}


class ConnectedComponents:
    """Each vertex adopts the smallest label it has seen and forwards changes."""

    def compute(self, vertex: dict[str, object], messages: Iterable[IntValue]) -> None:
        value: IntValue = vertex["value"]  # type: ignore[assignment]
        smallest = min([value, *messages])
        if smallest < value or vertex["step"] == 0:
            vertex["value"] = IntValue(smallest.get())
            neighbors = EDGES[vertex["id"]]  # type: ignore[index]
            vertex["outbox"] = [(IntValue(n), IntValue(smallest.get())) for n in neighbors]


def run(recorder: Recorder, job_id: str) -> None:
    values = {vid: IntValue(vid) for vid in EDGES}
    inbox: dict[int, list[IntValue]] = {vid: [] for vid in EDGES}
    computation = ConnectedComponents()
    for step in range(4):
        next_inbox: dict[int, list[IntValue]] = {vid: [] for vid in EDGES}
        for vid in EDGES:
            vertex: dict[str, object] = {
                "id": vid, "step": step, "value": values[vid], "outbox": []
            }
            scenario = Scenario.for_computation(
                ConnectedComponents,
                vertex_id_type=IntValue,
                vertex_value_type=IntValue,
                edge_value_type=NullValue,
                inbound_message_type=IntValue,
                step_number=step,
                vertex_id=IntValue(vid),
                vertex_value_before=values[vid],
            )
            for neighbor in EDGES[vid]:
                scenario.add_neighbor(IntValue(neighbor))
            for message in inbox[vid]:
                scenario.add_inbound_message(message)
            try:
                computation.compute(vertex, inbox[vid])
            except Exception as exc:
                recorder.capture_exception(job_id, scenario, exc)
                raise
            values[vid] = vertex["value"]  # type: ignore[assignment]
            for destination, message in vertex["outbox"]:  # type: ignore[attr-defined]
                scenario.add_outbound_message(destination, message)
                next_inbox[destination.get()].append(message)
            scenario.set_vertex_value_after(values[vid])
            recorder.capture(job_id, scenario)
        inbox = next_inbox


def main() -> None:
    with tempfile.TemporaryDirectory() as root:
        store = TraceStore(LocalFileSystem(root))
        config = DebugConfig(vertices_to_debug={"2"}, debug_neighbors=True, max_captures=20)
        run(Recorder(config=config, store=store), "cc-demo")

        query = TraceQuery(store, TypeRegistry([ConnectedComponents]))
        for step in query.list_steps("cc-demo"):
            for vertex_id in sorted(query.list_vertices("cc-demo", step)):
                scenario = query.load_scenario("cc-demo", step, vertex_id)
                print(render_scenario(scenario, verbosity="minimal"))
                print(query.project_for_display(scenario).model_dump(by_alias=True))


if __name__ == "__main__":
    main()
