from typing import Protocol

from thompson_viz.errors import GraphInvariantError
from thompson_viz.graph import Automaton, GraphArena, StateTag


class GraphSink(Protocol):
    def mark_initial(self, state_id: int) -> None: ...

    def draw_state(self, state_id: int, tag: StateTag | None) -> None: ...

    def mark_accepting(self, state_id: int) -> None: ...

    def draw_edge(
        self, source: int, target: int, label: str | None, tag: StateTag
    ) -> None: ...


class EventRecorder:
    def __init__(self):
        self.events: list[tuple] = []

    def mark_initial(self, state_id: int) -> None:
        self.events.append(("initial", state_id))

    def draw_state(self, state_id: int, tag: StateTag | None) -> None:
        self.events.append(("state", state_id, tag))

    def mark_accepting(self, state_id: int) -> None:
        self.events.append(("accepting", state_id))

    def draw_edge(
        self, source: int, target: int, label: str | None, tag: StateTag
    ) -> None:
        self.events.append(("edge", source, target, label, tag))

    def of_kind(self, kind: str) -> list[tuple]:
        return [event for event in self.events if event[0] == kind]

    @property
    def states(self) -> set[int]:
        return {event[1] for event in self.of_kind("state")}

    @property
    def edges(self) -> set[tuple[int, int, str | None]]:
        return {(src, dst, label) for _, src, dst, label, _ in self.of_kind("edge")}

    @property
    def accepting(self) -> set[int]:
        return {event[1] for event in self.of_kind("accepting")}


def canonical_target(arena: GraphArena, target: int) -> int:
    """Skip over concatenation join states, which always have one edge."""
    seen = set()
    while arena[target].tag is StateTag.CONCAT_JOIN:
        if target in seen:
            raise GraphInvariantError(f"cycle of concatenation join states at {target}")
        seen.add(target)
        (target,) = arena[target].targets
    return target


def canonical_edges(automaton: Automaton) -> dict[int, list[tuple[int, StateTag]]]:
    arena = automaton.arena
    edges = {}
    stack = [automaton.entry]
    while stack:
        state_id = stack.pop()
        if state_id in edges:
            continue
        edges[state_id] = [
            (canonical_target(arena, target), tag)
            for target, tag in arena[state_id].edges()
        ]
        stack.extend(target for target, _ in reversed(edges[state_id]))
    return edges


def _walk(automaton: Automaton, sink: GraphSink, canonical: bool) -> None:
    arena = automaton.arena
    visited: set[int] = set()
    stack = [automaton.entry]
    sink.mark_initial(automaton.entry)
    while stack:
        state_id = stack.pop()
        if state_id in visited:
            continue
        visited.add(state_id)

        state = arena[state_id]
        sink.draw_state(state_id, None if canonical else state.tag)
        if state.is_accepting:
            sink.mark_accepting(state_id)

        targets = []
        for target, tag in state.edges():
            if canonical:
                target = canonical_target(arena, target)
            sink.draw_edge(state_id, target, state.label, tag)
            targets.append(target)
        stack.extend(reversed(targets))


def render_verbatim(automaton: Automaton, sink: GraphSink) -> None:
    _walk(automaton, sink, canonical=False)


def render_canonical(automaton: Automaton, sink: GraphSink) -> None:
    _walk(automaton, sink, canonical=True)
