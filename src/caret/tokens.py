"""Token model and the tokenizer interface the engines consume."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol


class TokenClass(Enum):
    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Token:
    """A lexed token covering the half-open range ``[start, end)``."""

    start: int
    end: int
    kind: TokenClass = TokenClass.OTHER

    @property
    def is_completable(self) -> bool:
        # keywords can start identifiers while typing
        return self.kind in (TokenClass.IDENTIFIER, TokenClass.KEYWORD)

    def contains_inclusive(self, offset: int) -> bool:
        return self.start <= offset <= self.end


class TokenizeError(Exception):
    """Raised by a reporting tokenizer on malformed input."""

    def __init__(self, offset: int, message: str) -> None:
        super().__init__(f"{message} at offset {offset}")
        self.offset = offset


class Tokenizer(Protocol):
    """Interface for tokenizers.

    With ``suppress_diagnostics`` set a tokenizer must not report problems
    with malformed input; it still returns whatever tokens it recognised.
    """

    def tokenize(self, text: str, *, suppress_diagnostics: bool = False) -> Sequence[Token]: ...


# True when the text cannot be a complete statement yet.
CompletenessCheck = Callable[[str], bool]
