from dataclasses import dataclass, field
from enum import Enum

from thompson_viz.errors import GraphInvariantError


class StateTag(Enum):
    CHAR = "char"
    CONCAT_JOIN = "concat_join"
    ALTERNATION = "alternation"
    CLOSURE = "closure"


MAX_OUT_DEGREE = 2


@dataclass
class State:
    id: int
    tag: StateTag
    label: str | None = None
    targets: list[int] = field(default_factory=list)
    edge_tags: list[StateTag] = field(default_factory=list)

    @property
    def is_accepting(self) -> bool:
        return not self.targets

    def edges(self) -> list[tuple[int, StateTag]]:
        return list(zip(self.targets, self.edge_tags))


@dataclass(frozen=True)
class Fragment:
    entry: int
    exit: int


class GraphArena:
    """Owns every state of an automaton.

    States are addressed by index; an edge is just an index stored in the
    source state's ``targets`` list, so cycles need no special handling.
    """

    def __init__(self):
        self._states: list[State] = []

    def __len__(self) -> int:
        return len(self._states)

    def __getitem__(self, state_id: int) -> State:
        return self._states[state_id]

    def __iter__(self):
        return iter(self._states)

    @property
    def next_id(self) -> int:
        return len(self._states)

    def new_state(self, tag: StateTag, label: str | None = None) -> int:
        state = State(id=self.next_id, tag=tag, label=label)
        self._states.append(state)
        return state.id

    def add_edge(
        self,
        source: int,
        target: int,
        tag: StateTag,
        label: str | None = None,
    ) -> None:
        state = self._states[source]
        if len(state.targets) >= MAX_OUT_DEGREE:
            raise GraphInvariantError(
                f"state {source} already has {MAX_OUT_DEGREE} outgoing edges"
            )
        if state.targets and state.label != label:
            raise GraphInvariantError(
                f"outgoing edges of state {source} must share one label"
            )
        if target >= len(self._states):
            raise GraphInvariantError(f"unknown target state {target}")
        state.label = label
        state.targets.append(target)
        state.edge_tags.append(tag)

    def retag(self, state_id: int, tag: StateTag) -> None:
        self._states[state_id].tag = tag

    def clear(self) -> None:
        self._states.clear()


@dataclass
class Automaton:
    arena: GraphArena
    entry: int
    concatenation_count: int = 0

    def state(self, state_id: int) -> State:
        return self.arena[state_id]

    def reachable(self) -> list[int]:
        visited = {self.entry}
        order = [self.entry]
        stack = [self.entry]
        while stack:
            for target in self.arena[stack.pop()].targets:
                if target not in visited:
                    visited.add(target)
                    order.append(target)
                    stack.append(target)
        return order

    def accepting_states(self) -> list[int]:
        return [
            state_id
            for state_id in self.reachable()
            if self.arena[state_id].is_accepting
        ]

    @property
    def alphabet(self) -> set[str]:
        return {
            self.arena[state_id].label
            for state_id in self.reachable()
            if self.arena[state_id].label is not None
        }
