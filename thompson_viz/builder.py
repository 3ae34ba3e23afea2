import logging

from thompson_viz.errors import RegexSyntaxError
from thompson_viz.graph import Automaton, Fragment, GraphArena, StateTag
from thompson_viz.tokenizer import SymbolKind, Token, tokenize

logger = logging.getLogger(__name__)

ATOM_START = frozenset({SymbolKind.CHAR, SymbolKind.OPEN})


class FragmentBuilder:
    """Recursive-descent parser that synthesizes one NFA fragment per rule.

    Grammar::

        Expr    -> Seq | Seq PIPE Expr
        Seq     -> Closure | Closure Seq
        Closure -> Atom | Atom STAR
        Atom    -> OPEN Expr PAREN_CLOSE | symbol

    Fragments only flow upwards, so every concatenation leaves the left
    operand's exit in the graph as an extra epsilon hop tagged
    ``CONCAT_JOIN``.
    """

    def __init__(self, tokens: list[Token], arena: GraphArena | None = None):
        self._tokens = tokens
        self._pos = 0
        self._arena = arena if arena is not None else GraphArena()
        self._concatenations = 0

    @property
    def _current(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        token = self._current
        if token.kind is not SymbolKind.END:
            self._pos += 1
        return token

    def _expect(self, kind: SymbolKind) -> Token:
        if self._current.kind is not kind:
            self._unexpected()
        return self._advance()

    def _unexpected(self):
        token = self._current
        if token.kind is SymbolKind.END:
            raise RegexSyntaxError("unexpected end of expression", token.position)
        raise RegexSyntaxError(f"unexpected symbol {token.value!r}", token.position)

    def build(self) -> Automaton:
        fragment = self._expr()
        self._expect(SymbolKind.END)
        logger.debug(
            "built automaton with %d states, entry %d, %d concatenations",
            len(self._arena),
            fragment.entry,
            self._concatenations,
        )
        return Automaton(
            arena=self._arena,
            entry=fragment.entry,
            concatenation_count=self._concatenations,
        )

    def _expr(self) -> Fragment:
        left = self._seq()
        if self._current.kind is SymbolKind.PIPE:
            self._advance()
            return self.alternation(left, self._expr())
        return left

    def _seq(self) -> Fragment:
        closures = [self._closure()]
        while self._current.kind in ATOM_START:
            closures.append(self._closure())

        # Seq -> Closure Seq reduces from the right
        fragment = closures.pop()
        while closures:
            fragment = self.concatenation(closures.pop(), fragment)
        return fragment

    def _closure(self) -> Fragment:
        atom = self._atom()
        if self._current.kind is SymbolKind.STAR:
            self._advance()
            return self.closure(atom)
        return atom

    def _atom(self) -> Fragment:
        token = self._current
        if token.kind is SymbolKind.CHAR:
            self._advance()
            return self.symbol(token.value)
        if token.kind is SymbolKind.OPEN:
            self._advance()
            inner = self._expr()
            self._expect(SymbolKind.PAREN_CLOSE)
            return inner
        self._unexpected()

    def symbol(self, char: str) -> Fragment:
        entry = self._arena.new_state(StateTag.CHAR)
        exit_ = self._arena.new_state(StateTag.CHAR)
        self._arena.add_edge(entry, exit_, StateTag.CHAR, label=char)
        logger.debug("symbol %r -> (%d, %d)", char, entry, exit_)
        return Fragment(entry, exit_)

    def concatenation(self, left: Fragment, right: Fragment) -> Fragment:
        self._arena.add_edge(left.exit, right.entry, StateTag.CONCAT_JOIN)
        self._arena.retag(left.exit, StateTag.CONCAT_JOIN)
        self._concatenations += 1
        logger.debug("concatenation joins %d -> %d", left.exit, right.entry)
        return Fragment(left.entry, right.exit)

    def alternation(self, first: Fragment, second: Fragment) -> Fragment:
        entry = self._arena.new_state(StateTag.ALTERNATION)
        exit_ = self._arena.new_state(StateTag.ALTERNATION)
        self._arena.add_edge(entry, first.entry, StateTag.ALTERNATION)
        self._arena.add_edge(entry, second.entry, StateTag.ALTERNATION)
        self._arena.add_edge(first.exit, exit_, StateTag.ALTERNATION)
        self._arena.add_edge(second.exit, exit_, StateTag.ALTERNATION)
        logger.debug("alternation -> (%d, %d)", entry, exit_)
        return Fragment(entry, exit_)

    def closure(self, body: Fragment) -> Fragment:
        entry = self._arena.new_state(StateTag.CLOSURE)
        exit_ = self._arena.new_state(StateTag.CLOSURE)
        self._arena.add_edge(entry, body.entry, StateTag.CLOSURE)
        self._arena.add_edge(entry, exit_, StateTag.CLOSURE)
        self._arena.add_edge(body.exit, exit_, StateTag.CLOSURE)
        # back-edge: the only source of cycles
        self._arena.add_edge(body.exit, body.entry, StateTag.CLOSURE)
        logger.debug("closure -> (%d, %d)", entry, exit_)
        return Fragment(entry, exit_)


def build_automaton(text: str, arena: GraphArena | None = None) -> Automaton:
    tokens = tokenize(text)
    if arena is not None:
        arena.clear()
    return FragmentBuilder(tokens, arena).build()
