"""
Content protection for machine translation.

Replaces translation-unsafe substrings (markup, code, URLs, file paths and
glossary terms) with placeholder tokens before the text goes to the provider,
recording the original content so it can be restored afterwards.
"""
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from doctranslate.common.placeholder_format import (
    DEFAULT_FORMAT,
    PLACEHOLDER_PATTERN,
    PlaceholderFormat,
    PlaceholderKind,
)
from doctranslate.core.glossary import Glossary, splice

XML_TAG_PATTERN = re.compile(r'<[^>]+>')
CODE_BLOCK_PATTERN = re.compile(r'```[\s\S]*?```')
INLINE_CODE_PATTERN = re.compile(r'`[^`\n]+`')
URL_PATTERN = re.compile(r'https?://[^\s)]+')
FILE_PATH_PATTERN = re.compile(r'(^|\s)([./][\w/.\-]+(?:\.\w+)?)', re.MULTILINE)


@dataclass(frozen=True)
class Placeholder:
    """A token standing in for protected content."""
    token: str
    original_content: str
    kind: PlaceholderKind
    index: int


@dataclass(frozen=True)
class ProtectedDocument:
    """Protected text plus the placeholders needed to restore it."""
    text: str
    placeholders: Tuple[Placeholder, ...] = ()

    @property
    def tokens(self) -> List[str]:
        return [p.token for p in self.placeholders]

    def of_kind(self, kind: PlaceholderKind) -> Tuple[Placeholder, ...]:
        return tuple(p for p in self.placeholders if p.kind is kind)


def _looks_like_path(candidate: str) -> bool:
    # Ordinary words containing dots are left for the translator
    return '/' in candidate or candidate.startswith('./') or candidate.startswith('../')


class ContentProtector:
    """
    Extracts protected spans into placeholders for one document.

    The protector owns the counter and placeholder list, so one instance must
    serve exactly one protect() call; protect_text() creates a fresh one.

    Example:
        >>> doc = ContentProtector().protect("See https://a.io and `x`")
        >>> doc.text
        'See __URL_1__ and __INLINE_CODE_0__'
    """

    def __init__(self, glossary: Optional[Glossary] = None,
                 placeholder_format: PlaceholderFormat = DEFAULT_FORMAT):
        self.glossary = glossary or Glossary()
        self.format = placeholder_format
        self._counter = 0
        self._placeholders: Dict[str, Placeholder] = {}
        self._used = False
        self._source = ""

    def protect(self, raw_text: str) -> ProtectedDocument:
        """
        Run every extraction pass in priority order.

        Earlier passes claim content first: a URL inside a tag attribute is
        protected as part of the tag, a glossary term inside a code block is
        part of the block.
        """
        if self._used:
            raise RuntimeError("ContentProtector instances protect a single document")
        self._used = True

        if not raw_text:
            return ProtectedDocument(text=raw_text or "", placeholders=())

        self._source = raw_text
        text = raw_text
        text = self._protect_pattern(text, XML_TAG_PATTERN, PlaceholderKind.XML_TAG)
        text = self._protect_pattern(text, CODE_BLOCK_PATTERN, PlaceholderKind.CODE_BLOCK)
        text = self._protect_pattern(text, INLINE_CODE_PATTERN, PlaceholderKind.INLINE_CODE)
        text = self._protect_pattern(text, URL_PATTERN, PlaceholderKind.URL)
        text = self._protect_file_paths(text)
        text = self._protect_glossary_terms(text)

        return ProtectedDocument(text=text, placeholders=tuple(self._placeholders.values()))

    def _collides(self, kind: PlaceholderKind, index: int) -> bool:
        """True if the token for index, or its recovery shape, already occurs in the source."""
        if self.format.create(kind, index) in self._source:
            return True
        return (kind is PlaceholderKind.GLOSSARY
                and self.format.recovery_pattern(index).search(self._source) is not None)

    def _allocate(self, kind: PlaceholderKind, content: str) -> str:
        while self._collides(kind, self._counter):
            self._counter += 1
        token = self.format.create(kind, self._counter)
        self._placeholders[token] = Placeholder(token, content, kind, self._counter)
        self._counter += 1
        return token

    def _absorb(self, fragment: str) -> str:
        """
        Expand our tokens inside fragment back to their original content.

        Used when a later pass claims a span that wholly contains earlier
        placeholders (a code block holding an HTML tag): the span is stored
        verbatim and the inner placeholders are dropped.
        """
        def expand(match: re.Match) -> str:
            placeholder = self._placeholders.pop(match.group(0), None)
            return placeholder.original_content if placeholder else match.group(0)

        return PLACEHOLDER_PATTERN.sub(expand, fragment)

    def _token_spans(self, text: str) -> List[Tuple[int, int]]:
        return [
            m.span() for m in PLACEHOLDER_PATTERN.finditer(text)
            if m.group(0) in self._placeholders
        ]

    def _replace(self, text: str, pattern: re.Pattern,
                 replacement: Callable[[re.Match], str]) -> str:
        """
        Substitute matches of pattern, skipping any match that cuts through a token.

        Token spans are computed once per pass on the incoming text; matches
        are found on the same text, so the spans stay valid.
        """
        token_spans = self._token_spans(text)

        def cuts_token(match: re.Match) -> bool:
            start, end = match.span()
            return any(
                start < t_end and t_start < end and not (start <= t_start and t_end <= end)
                for t_start, t_end in token_spans
            )

        def substitute(match: re.Match) -> str:
            if cuts_token(match):
                return match.group(0)
            return replacement(match)

        return pattern.sub(substitute, text)

    def _protect_pattern(self, text: str, pattern: re.Pattern, kind: PlaceholderKind) -> str:
        return self._replace(text, pattern, lambda m: self._allocate(kind, self._absorb(m.group(0))))

    def _protect_file_paths(self, text: str) -> str:
        def replacement(match: re.Match) -> str:
            leading, candidate = match.group(1), match.group(2)
            if not _looks_like_path(candidate):
                return match.group(0)
            return leading + self._allocate(PlaceholderKind.FILE_PATH, self._absorb(candidate))

        return self._replace(text, FILE_PATH_PATTERN, replacement)

    def _protect_glossary_terms(self, text: str) -> str:
        for entry in self.glossary:
            # Token edges are word boundaries: <b>API</b> protects API
            spans = entry.find_in(text, self._token_spans(text))
            text = splice(text, spans, lambda term: self._allocate(PlaceholderKind.GLOSSARY, term))
        return text


def protect_text(raw_text: str, glossary: Optional[Glossary] = None) -> ProtectedDocument:
    """Protect one document with a fresh ContentProtector."""
    return ContentProtector(glossary).protect(raw_text)
