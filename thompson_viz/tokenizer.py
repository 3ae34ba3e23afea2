import string

from dataclasses import dataclass
from enum import Enum

from thompson_viz.errors import LexicalError


class SymbolKind(Enum):
    CHAR = "char"
    STAR = "*"
    PIPE = "|"
    OPEN = "("
    PAREN_CLOSE = ")"
    END = "end"


@dataclass(frozen=True)
class Token:
    kind: SymbolKind
    value: str
    position: int


ALPHABET = frozenset(string.ascii_letters + string.digits)
OPERATORS = {
    "*": SymbolKind.STAR,
    "|": SymbolKind.PIPE,
    "(": SymbolKind.OPEN,
    ")": SymbolKind.PAREN_CLOSE,
}
TERMINATORS = frozenset("\r\n")


def tokenize(text: str) -> list[Token]:
    tokens = []
    position = 0
    for position, char in enumerate(text):
        if char in TERMINATORS:
            break
        if char in ALPHABET:
            tokens.append(Token(SymbolKind.CHAR, char, position))
        elif char in OPERATORS:
            tokens.append(Token(OPERATORS[char], char, position))
        elif char.isspace():
            continue
        else:
            raise LexicalError(f"unexpected character {char!r}", position)
    else:
        position = len(text)
    tokens.append(Token(SymbolKind.END, "", position))
    return tokens
