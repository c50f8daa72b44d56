"""
JSON description adapter.

Walks a parsed JSON document and translates only string values stored under
keys named "description". Everything else, including key order, is kept.
A field that fails to translate keeps its original value so one bad field
never aborts its siblings.
"""

import json
from enum import Enum
from typing import Any

from .format_adapter import FormatAdapter
from doctranslate.core.exceptions import JsonValidationError, TranslationError
from doctranslate.utils.unified_logger import LogType, get_logger

TRANSLATABLE_KEY = "description"


class JsonKind(Enum):
    """The closed set of JSON value kinds."""
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


def json_kind(value: Any) -> JsonKind:
    """Classify a value produced by json.loads."""
    if value is None:
        return JsonKind.NULL
    # bool before number: bool is a subclass of int
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, list):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


class JsonAdapter(FormatAdapter):
    """Adapter for JSON files with translatable description fields."""

    def __init__(self, pipeline, source_name: str = "<json>"):
        super().__init__(pipeline)
        self.source_name = source_name
        self.logger = get_logger()
        self.translated_fields = 0
        self.failed_fields = 0

    @property
    def format_name(self) -> str:
        return "JSON"

    async def translate(self, content: str) -> str:
        """
        Translate every description field and serialize the result.

        Raises:
            JsonValidationError: If the input is not valid JSON (NaN and
                Infinity included) or the output does not re-parse
        """
        try:
            data = json.loads(content, parse_constant=_reject_constant)
        except ValueError as e:
            raise JsonValidationError(f"Invalid JSON in {self.source_name}: {e}", original_error=e) from e

        translated = await self.transform(data)

        try:
            json_string = json.dumps(translated, ensure_ascii=False, indent=2, allow_nan=False)
            json.loads(json_string, parse_constant=_reject_constant)
        except ValueError as e:
            self.logger.error(f"Generated invalid JSON for {self.source_name}: {e}", LogType.ERROR_DETAIL)
            raise JsonValidationError(f"Generated invalid JSON: {e}", original_error=e) from e

        return json_string

    async def transform(self, value: Any) -> Any:
        """Recursive descent over the JSON value; returns a new value."""
        kind = json_kind(value)

        if kind is JsonKind.OBJECT:
            result = {}
            for key, child in value.items():
                if key == TRANSLATABLE_KEY and json_kind(child) is JsonKind.STRING:
                    result[key] = await self._translate_field(child)
                else:
                    result[key] = await self.transform(child)
            return result

        if kind is JsonKind.ARRAY:
            return [await self.transform(item) for item in value]

        # Scalars outside a description key are left as they are
        return value

    async def _translate_field(self, value: str) -> str:
        try:
            translated = await self.pipeline.translate_text(value)
        except TranslationError as e:
            self.failed_fields += 1
            self.logger.warning(
                f"Failed to translate description in {self.source_name}, keeping original: {e}"
            )
            translated = value
        else:
            self.translated_fields += 1
        finally:
            # Pace provider calls between fields whatever the outcome
            await self.pipeline.gateway.pause()
        return translated
