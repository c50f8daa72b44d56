"""
Centralized placeholder format detection and manipulation.

Placeholders are short ASCII tokens that replace protected content while a
document is sent to the translation provider:

    __XML_TAG_0__, __CODE_BLOCK_1__, __INLINE_CODE_2__, __URL_3__,
    __FILE_PATH_4__, __G5__

The number is allocated from one counter per document, so it is unique across
all kinds.
"""
import re
from enum import Enum
from typing import Iterable, List, Optional


class PlaceholderKind(Enum):
    """Kinds of protected content, in extraction order."""
    XML_TAG = "XML_TAG"
    CODE_BLOCK = "CODE_BLOCK"
    INLINE_CODE = "INLINE_CODE"
    URL = "URL"
    FILE_PATH = "FILE_PATH"
    GLOSSARY = "G"


# Any token this module can emit: __KIND_n__ or __Gn__
PLACEHOLDER_PATTERN = re.compile(r'__(?:[A-Z]+(?:_[A-Z]+)*_|G)(\d+)__')

# A glossary token after the provider translated its alphabetic part, e.g.
# __GLOSSARY_96__ -> __词汇表_96__. Letters of any script, no digits.
TRANSLATED_PLACEHOLDER_PATTERN = re.compile(r'__[^\W\d_]+_(\d+)__')


class PlaceholderFormat:
    """
    Encapsulates placeholder creation and matching.

    Example:
        >>> fmt = PlaceholderFormat()
        >>> fmt.create(PlaceholderKind.URL, 3)
        '__URL_3__'
        >>> fmt.create(PlaceholderKind.GLOSSARY, 5)
        '__G5__'
        >>> fmt.parse('__G5__')
        5
    """

    def create(self, kind: PlaceholderKind, index: int) -> str:
        """Create the token for a kind and counter value."""
        if kind is PlaceholderKind.GLOSSARY:
            return f"__G{index}__"
        return f"__{kind.value}_{index}__"

    def parse(self, token: str) -> Optional[int]:
        """
        Extract the counter value from a token.

        Returns:
            Index as integer, or None if the token is not a placeholder
        """
        match = PLACEHOLDER_PATTERN.fullmatch(token)
        if match:
            return int(match.group(1))
        return None

    def matches(self, text: str) -> bool:
        """Check if text is exactly one placeholder token."""
        return PLACEHOLDER_PATTERN.fullmatch(text) is not None

    def is_glossary_token(self, token: str) -> bool:
        return re.fullmatch(r'__G\d+__', token) is not None

    def recovery_pattern(self, index: int) -> re.Pattern:
        """
        Pattern for a glossary token whose alphabetic prefix was altered.

        The double underscores and the `_<n>__` suffix must have survived.
        """
        return re.compile(rf'__[^\W\d_]+_{index}__')

    def find_all(self, text: str) -> list:
        """
        Find all placeholder tokens in text.

        Returns:
            List of (start_pos, end_pos, token, index) tuples
        """
        return [
            (m.start(), m.end(), m.group(0), int(m.group(1)))
            for m in PLACEHOLDER_PATTERN.finditer(text)
        ]

    def find_residual(self, text: str, exclude: Iterable[str] = ()) -> List[str]:
        """
        Find placeholder-shaped tokens left in text.

        Covers both emitted tokens and translated glossary tokens. Tokens in
        exclude (e.g. ones the source document already contained) are skipped.
        """
        skipped = set(exclude)
        found = []
        seen_spans = set()
        for pattern in (PLACEHOLDER_PATTERN, TRANSLATED_PLACEHOLDER_PATTERN):
            for m in pattern.finditer(text):
                if m.span() in seen_spans or m.group(0) in skipped:
                    continue
                seen_spans.add(m.span())
                found.append(m.group(0))
        return found

    def __repr__(self) -> str:
        return "PlaceholderFormat(pattern='__<KIND>_<n>__' | '__G<n>__')"


DEFAULT_FORMAT = PlaceholderFormat()
