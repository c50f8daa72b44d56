"""
Placeholder restoration after translation.

Restores the original content of every placeholder, including glossary tokens
whose alphabetic part the provider translated (e.g. __GLOSSARY_96__ coming
back as __词汇表_96__).
"""
from typing import Iterable, List

from doctranslate.common.placeholder_format import DEFAULT_FORMAT, PlaceholderFormat
from doctranslate.core.exceptions import RestorationDefect
from doctranslate.core.protector import Placeholder


def restore(translated_text: str, placeholders: Iterable[Placeholder],
            placeholder_format: PlaceholderFormat = DEFAULT_FORMAT) -> str:
    """
    Re-insert original content for each placeholder.

    Args:
        translated_text: Provider output with placeholder tokens
        placeholders: Placeholders to restore (a subset is allowed)

    Returns:
        Text with the given placeholders restored
    """
    text = translated_text

    # Longest token first so a short token never matches inside a longer one
    ordered = sorted(placeholders, key=lambda p: len(p.token), reverse=True)

    for placeholder in ordered:
        text = text.replace(placeholder.token, placeholder.original_content)

        if placeholder_format.is_glossary_token(placeholder.token):
            recovery = placeholder_format.recovery_pattern(placeholder.index)
            # Callable replacement: content is literal, never a template
            text = recovery.sub(lambda _m, c=placeholder.original_content: c, text)

    return text


def find_residual_placeholders(text: str, source_text: str = "",
                               placeholder_format: PlaceholderFormat = DEFAULT_FORMAT) -> List[str]:
    """
    List placeholder-shaped tokens still present after restoration.

    Tokens that already appeared in source_text are not reported, so a
    document that legitimately mentions __URL_1__ is not flagged.
    """
    exclude = placeholder_format.find_residual(source_text) if source_text else ()
    return placeholder_format.find_residual(text, exclude)


def validate_restoration(text: str, source_text: str = "") -> None:
    """
    Raise RestorationDefect if any placeholder token survived restoration.

    Catches providers that corrupt a token beyond what the recovery pass can
    repair, for example by changing its digits.
    """
    residual = find_residual_placeholders(text, source_text)
    if residual:
        raise RestorationDefect(
            f"{len(residual)} placeholder(s) could not be restored: {', '.join(residual[:5])}",
            residual_tokens=residual
        )
