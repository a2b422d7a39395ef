"""
Keyword conditions used to recognise user commands.

A ``Condition`` is a small immutable tree.  A leaf holds a keyword stem and is
satisfied when any token *starts with* that stem, so "СЦЕНАР" matches both
"СЦЕНАРИЙ" and "СЦЕНАРИИ" and inflected Russian words are recognised without
a stemmer.  An inner node holds child conditions and is satisfied when at
least ``threshold`` of them are.

Tokens must already be upper case; use :func:`tokenize` to prepare raw text.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple


def tokenize(text: str) -> List[str]:
    """Split ``text`` on whitespace and upper-case every token."""
    return text.upper().split()


@dataclass(frozen=True)
class Condition:
    """
    Threshold-of-children predicate over a token collection.

    Parameters
    ----------
    threshold:
        Minimum number of children that must hold.  A threshold greater than
        the number of children is legal and makes the condition always false.
    children:
        Nested conditions.  When empty, the condition tests ``keyword``.
    keyword:
        Keyword stem, upper-cased at construction.  Ignored when ``children``
        is not empty.
    """

    threshold: int = 1
    children: Tuple["Condition", ...] = ()
    keyword: str = ""

    def __post_init__(self) -> None:
        if self.threshold < 1:
            raise ValueError(f"threshold must be >= 1, got {self.threshold}")
        object.__setattr__(self, "children", tuple(self.children))
        object.__setattr__(self, "keyword", self.keyword.upper())

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def word(cls, keyword: str) -> "Condition":
        """Leaf condition matching tokens that start with ``keyword``."""
        return cls(keyword=keyword)

    @classmethod
    def at_least(cls, threshold: int, *children: "Condition") -> "Condition":
        return cls(threshold=threshold, children=children)

    @classmethod
    def any_of(cls, *keywords: str) -> "Condition":
        """At least one of ``keywords`` must be present."""
        return cls.at_least(1, *(cls.word(k) for k in keywords))

    @classmethod
    def all_of(cls, *keywords: str) -> "Condition":
        """Every one of ``keywords`` must be present."""
        return cls.at_least(len(keywords), *(cls.word(k) for k in keywords))

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------
    @property
    def is_leaf(self) -> bool:
        return not self.children

    def evaluate(self, tokens: Iterable[str]) -> bool:
        """Return True if the condition holds for the upper-cased ``tokens``."""
        tokens = tuple(tokens)
        if self.is_leaf:
            return any(token.startswith(self.keyword) for token in tokens)
        fulfilled = sum(1 for child in self.children if child.evaluate(tokens))
        return fulfilled >= self.threshold
