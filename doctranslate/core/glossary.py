"""
Glossary store and glossary application.

A glossary maps a source term to its rendering in the target language:

    {"React": "React", "API": "接口"}

Entries whose rendering equals the term are protected-only (proper nouns kept
verbatim). Entries whose rendering differs are protected during translation and
substituted afterwards by apply_glossary().
"""
import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from doctranslate.utils.unified_logger import get_logger

Span = Tuple[int, int]

_WORD_CHAR = re.compile(r'\w')


def find_term(text: str, term: str, token_spans: Sequence[Span] = ()) -> List[Span]:
    """
    Non-overlapping spans where term occurs as a whole word.

    Matching is case-insensitive. A term is whole when the characters around
    it are not word characters, which also lets terms that start or end with
    punctuation (C++, .NET) match. The edge of a placeholder token listed in
    token_spans counts as a boundary too: in "__XML_TAG_0__API__XML_TAG_1__"
    the API span is found. Spans that overlap a token are never returned.
    """
    token_starts = {start for start, _ in token_spans}
    token_ends = {end for _, end in token_spans}

    def bounded(start: int, end: int) -> bool:
        if any(start < t_end and t_start < end for t_start, t_end in token_spans):
            return False
        left = start == 0 or start in token_ends or not _WORD_CHAR.match(text[start - 1])
        right = end == len(text) or end in token_starts or not _WORD_CHAR.match(text[end])
        return left and right

    # Zero-width scan: candidates may overlap, the first bounded one wins
    candidates = re.compile(rf'(?=({re.escape(term)}))', re.IGNORECASE)
    spans: List[Span] = []
    last_end = 0
    for match in candidates.finditer(text):
        start, end = match.start(1), match.end(1)
        if start >= last_end and bounded(start, end):
            spans.append((start, end))
            last_end = end
    return spans


def token_spans_of(text: str, tokens: Iterable[str]) -> List[Span]:
    """Spans of every occurrence of the given placeholder tokens in text."""
    spans = []
    for token in set(tokens):
        start = text.find(token)
        while start != -1:
            spans.append((start, start + len(token)))
            start = text.find(token, start + len(token))
    return spans


def splice(text: str, spans: Sequence[Span], replacement: Callable[[str], str]) -> str:
    """Replace sorted, non-overlapping spans, calling replacement left to right."""
    parts = []
    last = 0
    for start, end in spans:
        parts.append(text[last:start])
        parts.append(replacement(text[start:end]))
        last = end
    parts.append(text[last:])
    return ''.join(parts)


@dataclass(frozen=True)
class GlossaryEntry:
    """One glossary term and its target-language rendering."""
    term: str
    rendering: str

    @property
    def protected_only(self) -> bool:
        return self.rendering == self.term

    @property
    def substitutable(self) -> bool:
        return not self.protected_only

    def find_in(self, text: str, token_spans: Sequence[Span] = ()) -> List[Span]:
        return find_term(text, self.term, token_spans)


class Glossary:
    """Read-only glossary, ordered longest term first."""

    def __init__(self, entries: Optional[Dict[str, str]] = None):
        items = [GlossaryEntry(term, rendering) for term, rendering in (entries or {}).items() if term]
        # Longest first so a short term never claims part of a longer one
        self._entries: Tuple[GlossaryEntry, ...] = tuple(
            sorted(items, key=lambda e: len(e.term), reverse=True)
        )
        self._by_lower = {e.term.lower(): e for e in reversed(self._entries)}

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'Glossary':
        """
        Load a glossary from a JSON file.

        A missing or malformed file degrades to an empty glossary; the
        pipeline still works, it simply protects and substitutes nothing.
        """
        logger = get_logger()
        glossary_path = Path(path)
        try:
            data = json.loads(glossary_path.read_text(encoding='utf-8'))
        except FileNotFoundError:
            logger.warning(f"Glossary not found at {glossary_path}, continuing without one")
            return cls()
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Could not load glossary {glossary_path}: {e}")
            return cls()

        if not isinstance(data, dict):
            logger.warning(f"Glossary {glossary_path} must be a JSON object, got {type(data).__name__}")
            return cls()

        entries = {}
        for term, rendering in data.items():
            if not isinstance(rendering, str):
                logger.warning(f"Skipping glossary term {term!r}: rendering must be a string")
                continue
            entries[term] = rendering

        logger.debug(f"Loaded {len(entries)} glossary entries from {glossary_path}")
        return cls(entries)

    def __iter__(self) -> Iterator[GlossaryEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def entry_for(self, text: str) -> Optional[GlossaryEntry]:
        """Case-insensitive lookup of the entry a matched term belongs to."""
        return self._by_lower.get(text.lower())

    @property
    def substitutable_entries(self) -> Tuple[GlossaryEntry, ...]:
        return tuple(e for e in self._entries if e.substitutable)


def apply_glossary(text: str, glossary: Glossary, tokens: Iterable[str] = ()) -> str:
    """
    Replace every substitutable term with its rendering.

    Protected-only entries are left alone since their original text was
    restored verbatim.

    Args:
        text: Translated text, possibly still holding placeholder tokens
        glossary: Glossary to apply
        tokens: Placeholder tokens still present in text; their edges count
            as word boundaries and their contents are never touched
    """
    tokens = [t for t in tokens if t]
    result = text
    for entry in glossary.substitutable_entries:
        spans = entry.find_in(result, token_spans_of(result, tokens))
        result = splice(result, spans, lambda _term, r=entry.rendering: r)
    return result
