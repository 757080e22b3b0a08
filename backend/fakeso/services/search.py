"""
Fake Stack Overflow Backend — Search Query Parser
===================================================

What:  Turns the text typed in the search box into tag names and words.
Who:   Used by QuestionService.search_questions().

Query syntax:
    [tag]      exact tag-name match, case-insensitive
    word       whole-word match against title or body, case-insensitive

    "[javascript] [react] async loop"
        → tag_names = ("javascript", "react"), words = ("async", "loop")

    Every tag and every word is an alternative: a question matches if it
    satisfies ANY of them.
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Tuple

TAG_PATTERN = re.compile(r"\[([^\]]+)\]")

# Characters with meaning inside a SQL LIKE pattern
_LIKE_SPECIALS = re.compile(r"([\\%_])")


@dataclass(frozen=True)
class SearchQuery:
    """A parsed search string."""

    tag_names: Tuple[str, ...] = ()
    words: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.tag_names and not self.words


def _unique(items: Iterable[str]) -> Tuple[str, ...]:
    seen = set()
    result: List[str] = []
    for item in items:
        if item and item not in seen:
            seen.add(item)
            result.append(item)
    return tuple(result)


def parse_search_query(query: str) -> SearchQuery:
    """
    Split a search string into lower-cased tag names and words.

    Bracketed tokens become tag names. Everything else, with the bracketed
    tokens cut out, is split on whitespace into words. Duplicates and empty
    tokens are dropped; first occurrence order is kept.
    """
    if not query:
        return SearchQuery()

    tag_names = _unique(name.strip().lower() for name in TAG_PATTERN.findall(query))
    remainder = TAG_PATTERN.sub(" ", query).strip().lower()
    words = _unique(remainder.split())
    return SearchQuery(tag_names=tag_names, words=words)


def whole_word_pattern(word: str) -> "re.Pattern[str]":
    """
    Case-insensitive regex matching `word` only as a whole word.

    The word must not touch another word character on either side, so terms
    that start or end with a symbol ("c++", ".net") still match.
    """
    return re.compile(rf"(?<!\w){re.escape(word)}(?!\w)", re.IGNORECASE)


def matches_any_word(title: str, text: str, words: Iterable[str]) -> bool:
    """True if any of `words` occurs as a whole word in the title or the body."""
    for word in words:
        pattern = whole_word_pattern(word)
        if pattern.search(title or "") or pattern.search(text or ""):
            return True
    return False


def like_contains(word: str) -> str:
    """LIKE pattern for "contains `word`", with wildcards escaped by backslash."""
    escaped = _LIKE_SPECIALS.sub(r"\\\1", word)
    return f"%{escaped}%"
