from pyformlang.finite_automaton import EpsilonNFA, Epsilon, State, Symbol

from thompson_viz.graph import Automaton
from thompson_viz.render import canonical_edges


def to_epsilon_nfa(automaton: Automaton, canonical: bool = False) -> EpsilonNFA:
    arena = automaton.arena
    if canonical:
        edges = canonical_edges(automaton)
    else:
        edges = {state_id: arena[state_id].edges() for state_id in automaton.reachable()}

    enfa = EpsilonNFA()
    enfa.add_start_state(State(automaton.entry))
    for state_id, out_edges in edges.items():
        label = arena[state_id].label
        symbol = Epsilon() if label is None else Symbol(label)
        for target, _ in out_edges:
            enfa.add_transition(State(state_id), symbol, State(target))
        if not out_edges:
            enfa.add_final_state(State(state_id))
    return enfa
