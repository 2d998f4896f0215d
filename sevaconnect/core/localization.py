"""
Localized text values.

Catalogue names and descriptions are stored as a mapping of locale code to
text, e.g. ``{"en": "Cleaning", "hi": "सफाई"}``, with ``en`` as the fallback.
"""

import json
from typing import Any, Dict, Optional

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

FALLBACK_LOCALE = "en"


class LocalizedString(dict):
    """Mapping of locale code to text with a fallback locale."""

    @classmethod
    def parse(cls, value: Any) -> "LocalizedString":
        """
        Normalize any stored or submitted representation.

        Accepts ``None``, plain strings, JSON-encoded objects, double-encoded
        JSON strings (unwrapped once) and mappings.
        """
        if value is None or value == "":
            return cls({FALLBACK_LOCALE: ""})

        if isinstance(value, LocalizedString):
            return cls(value)

        if isinstance(value, dict):
            return cls({str(k): str(v) for k, v in value.items() if v is not None})

        if isinstance(value, str):
            decoded = _try_json(value)
            if isinstance(decoded, dict):
                return cls.parse(decoded)
            if isinstance(decoded, str):
                # Double-encoded value: unwrap a single level only
                inner = _try_json(decoded)
                if isinstance(inner, dict):
                    return cls.parse(inner)
                return cls({FALLBACK_LOCALE: decoded})
            return cls({FALLBACK_LOCALE: value})

        return cls({FALLBACK_LOCALE: str(value)})

    @classmethod
    def parse_optional(cls, value: Any) -> Optional["LocalizedString"]:
        """Like :meth:`parse` but keeps ``None`` (an unset override) as ``None``."""
        if value is None:
            return None
        return cls.parse(value)

    def text(self, locale: Optional[str] = None) -> str:
        if locale and self.get(locale):
            return self[locale]
        if self.get(FALLBACK_LOCALE):
            return self[FALLBACK_LOCALE]
        for candidate in self.values():
            if candidate:
                return candidate
        return ""

    @property
    def fallback_text(self) -> str:
        return self.get(FALLBACK_LOCALE, "")

    @property
    def has_fallback(self) -> bool:
        return bool(self.fallback_text.strip())

    def to_dict(self) -> Dict[str, str]:
        return dict(self)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        # Lets schemas accept plain strings, JSON text or mappings for localized fields
        return core_schema.no_info_plain_validator_function(
            cls.parse,
            serialization=core_schema.plain_serializer_function_ser_schema(dict),
        )


def _try_json(raw: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        return None


__all__ = ["FALLBACK_LOCALE", "LocalizedString"]
