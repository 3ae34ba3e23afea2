from typing import Iterable

import numpy as np
import scipy as sp

from thompson_viz.graph import Automaton
from thompson_viz.render import canonical_edges


class AdjacencyMatrixNFA:
    def __init__(self, automaton: Automaton, canonical: bool = False):
        arena = automaton.arena
        if canonical:
            edges = canonical_edges(automaton)
        else:
            edges = {
                state_id: arena[state_id].edges()
                for state_id in automaton.reachable()
            }

        self._states_indices: dict[int, int] = {
            state_id: i for i, state_id in enumerate(edges)
        }
        self._states_amount: int = len(self._states_indices)
        self._matrix_size: tuple[int, int] = (self._states_amount, self._states_amount)
        self._start_state_index: int = self._states_indices[automaton.entry]
        self._final_states_indices: set[int] = set(
            self._states_indices[state_id]
            for state_id, out_edges in edges.items()
            if not out_edges
        )

        self._boolean_decomposition: dict[str, sp.sparse.csc_matrix] = {}
        epsilon = sp.sparse.lil_matrix(self._matrix_size, dtype=bool)
        for state_id, out_edges in edges.items():
            label = arena[state_id].label
            for target, _ in out_edges:
                u = self._states_indices[state_id]
                v = self._states_indices[target]
                if label is None:
                    epsilon[u, v] = True
                    continue
                if label not in self._boolean_decomposition:
                    self._boolean_decomposition[label] = sp.sparse.lil_matrix(
                        self._matrix_size, dtype=bool
                    )
                self._boolean_decomposition[label][u, v] = True

        self._boolean_decomposition = {
            label: matrix.tocsc()
            for label, matrix in self._boolean_decomposition.items()
        }
        self._epsilon_closure: sp.sparse.csc_matrix = self._closure(epsilon.tocsc())

    def _closure(self, matrix: sp.sparse.csc_matrix) -> sp.sparse.csc_matrix:
        closure = (matrix + sp.sparse.identity(self._states_amount, dtype=bool)).tocsc()
        while True:
            squared = (closure @ closure).astype(bool)
            if (squared != closure).count_nonzero() == 0:
                return closure
            closure = squared

    @property
    def boolean_decomposition(self) -> dict[str, sp.sparse.csc_matrix]:
        return self._boolean_decomposition

    @property
    def epsilon_closure(self) -> sp.sparse.csc_matrix:
        return self._epsilon_closure

    @property
    def states_amount(self) -> int:
        return self._states_amount

    @property
    def states_indices(self) -> dict[int, int]:
        return self._states_indices

    @property
    def start_configuration(self) -> np.ndarray:
        start_config = np.zeros(self._states_amount, dtype=bool)
        start_config[self._start_state_index] = True
        return self._epsilon_step(start_config)

    @property
    def final_configuration(self) -> np.ndarray:
        final_config = np.zeros(self._states_amount, dtype=bool)
        for final_state_index in self._final_states_indices:
            final_config[final_state_index] = True
        return final_config

    def _epsilon_step(self, config: np.ndarray) -> np.ndarray:
        return (self._epsilon_closure.T @ config.astype(int)) > 0

    def accepts(self, word: Iterable[str]) -> bool:
        current_config = self.start_configuration
        for symbol in word:
            if symbol not in self._boolean_decomposition:
                return False
            matrix = self._boolean_decomposition[symbol]
            current_config = self._epsilon_step(
                (matrix.T @ current_config.astype(int)) > 0
            )
        return bool(np.any(current_config & self.final_configuration))

    def is_empty(self) -> bool:
        reachable = self.start_configuration
        while True:
            step = reachable.copy()
            for matrix in self._boolean_decomposition.values():
                step |= (matrix.T @ reachable.astype(int)) > 0
            step = self._epsilon_step(step)
            if np.array_equal(step, reachable):
                break
            reachable = step
        return not np.any(reachable & self.final_configuration)
