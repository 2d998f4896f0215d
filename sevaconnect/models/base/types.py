"""
Custom SQLAlchemy types for specialized data handling.
"""

from typing import Any, Optional

from sqlalchemy import JSON, TypeDecorator

from sevaconnect.core.localization import LocalizedString


class LocalizedJSON(TypeDecorator):
    """
    Localized text stored as a JSON object of locale code to text.

    Values are normalized with :meth:`LocalizedString.parse` on the way in and
    out, so plain strings and double-encoded JSON written by older clients
    read back as mappings. SQL ``NULL`` stays ``None``.
    """

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> Optional[dict]:
        if value is None:
            return None
        return LocalizedString.parse(value).to_dict()

    def process_result_value(self, value: Any, dialect) -> Optional[LocalizedString]:
        if value is None:
            return None
        return LocalizedString.parse(value)


class StringList(TypeDecorator):
    """JSON array of strings; ``None`` reads back as an empty list."""

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> list:
        if not value:
            return []
        return [str(item) for item in value]

    def process_result_value(self, value: Any, dialect) -> list:
        return list(value or [])
