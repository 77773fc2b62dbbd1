"""
Display fields: read-only renderers for a single work package attribute.

``DisplayFieldService`` picks the field class registered for the schema
entry's ``type`` and falls back to ``DisplayField``.
"""

from __future__ import annotations

import datetime as dt
from typing import Any

from projectboard.views.resources import LinkRef, WorkPackageResource

PLACEHOLDER = "-"


class DisplayField:
    is_formattable = False

    def __init__(self, resource: WorkPackageResource, name: str, schema_entry: dict | None, context: dict | None = None):
        self.resource = resource
        self.name = name
        self.schema = schema_entry or {}
        self.context = context or {}

    @property
    def label(self) -> str:
        return self.schema.get("name") or self.name

    @property
    def value(self) -> Any:
        return self.resource.get(self.name)

    @property
    def is_empty(self) -> bool:
        return self.value in (None, "", [])

    @property
    def value_string(self) -> str:
        return str(self.value)

    def render(self) -> str:
        return PLACEHOLDER if self.is_empty else self.value_string

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class FormattableDisplayField(DisplayField):
    is_formattable = True

    @property
    def value(self) -> Any:
        v = self.resource.get(self.name)
        if isinstance(v, dict):
            return v.get("raw") or ""
        return v


class LinkDisplayField(DisplayField):
    @property
    def is_empty(self) -> bool:
        v = self.value
        return v is None or (isinstance(v, LinkRef) and not v.href)

    @property
    def value_string(self) -> str:
        v = self.value
        if isinstance(v, LinkRef):
            return v.title or v.id_from_link or PLACEHOLDER
        return str(v)


class DateDisplayField(DisplayField):
    @property
    def value_string(self) -> str:
        v = self.value
        if isinstance(v, str):
            return dt.date.fromisoformat(v).strftime(self.context.get("date_format", "%m/%d/%Y"))
        return str(v)


class DateTimeDisplayField(DisplayField):
    @property
    def value_string(self) -> str:
        v = self.value
        if isinstance(v, str):
            parsed = dt.datetime.fromisoformat(v.replace("Z", "+00:00"))
            return parsed.strftime(self.context.get("datetime_format", "%m/%d/%Y %I:%M %p"))
        return str(v)


class IdDisplayField(DisplayField):
    @property
    def value_string(self) -> str:
        return f"#{self.value}"


class DisplayFieldService:
    def __init__(self, default: type[DisplayField] = DisplayField):
        self.default = default
        self._classes: dict[str, type[DisplayField]] = {}

    def add_field_type(self, field_class: type[DisplayField], *schema_types: str) -> None:
        for schema_type in schema_types:
            self._classes[schema_type] = field_class

    def field_class_for(self, schema_entry: dict | None) -> type[DisplayField]:
        schema_type = (schema_entry or {}).get("type")
        return self._classes.get(schema_type, self.default)

    def get_field(self, resource: WorkPackageResource, name: str, schema_entry: dict | None,
                  context: dict | None = None) -> DisplayField:
        cls = self.field_class_for(schema_entry)
        return cls(resource, name, schema_entry, context)


def default_display_field_service() -> DisplayFieldService:
    service = DisplayFieldService()
    service.add_field_type(FormattableDisplayField, "Formattable")
    service.add_field_type(LinkDisplayField, "Project", "Type", "Category", "Version", "User", "Status")
    service.add_field_type(DateDisplayField, "Date")
    service.add_field_type(DateTimeDisplayField, "DateTime")
    service.add_field_type(IdDisplayField, "Integer")
    return service
