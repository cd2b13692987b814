"""Validation helpers for server settings read from the environment."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic_settings import EnvSettingsSource

if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


def parse_origin_list(value: str | list[str]) -> list[str]:
    """Parse a list of origins from a config value.

    Accepts a list of strings, a JSON array string ('["a","b"]') or a
    comma-separated string ('a,b'). An empty value yields an empty list,
    which disables cross-origin access. Malformed JSON raises ValueError.
    """
    if isinstance(value, list):
        return value

    stripped = value.strip()
    if stripped.startswith("["):
        try:
            parsed = json.loads(stripped)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON array: {e}") from e
        if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
            raise ValueError("JSON value must be an array of strings")
        return parsed

    return [origin.strip() for origin in stripped.split(",") if origin.strip()]


class OriginListEnvSettingsSource(EnvSettingsSource):
    """Env source that hands list fields to their validators as raw strings.

    pydantic-settings would otherwise JSON-decode list-typed env vars and
    reject the comma-separated form before parse_origin_list sees it.
    """

    list_fields = frozenset({"cors_origins"})

    def prepare_field_value(
        self,
        field_name: str,
        field: FieldInfo,
        value: Any,  # noqa: ANN401
        value_is_complex: bool,  # noqa: FBT001
    ) -> Any:  # noqa: ANN401
        if field_name in self.list_fields and isinstance(value, str):
            return value
        return super().prepare_field_value(field_name, field, value, value_is_complex)
