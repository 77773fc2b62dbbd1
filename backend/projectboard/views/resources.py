"""
Client-side view of the HAL documents produced by the v3 representers.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class LinkRef:
    href: str | None
    title: str | None = None

    @property
    def id_from_link(self) -> str | None:
        if not self.href:
            return None
        return self.href.rstrip("/").rsplit("/", 1)[-1]

    @classmethod
    def from_hal(cls, doc: dict | None) -> "LinkRef | None":
        if not doc or not doc.get("href"):
            return None
        return cls(href=doc["href"], title=doc.get("title"))


@dataclass
class SchemaResource:
    href: str | None
    attributes: dict[str, dict] = field(default_factory=dict)
    attribute_groups: list[dict] | None = None
    base_schema_href: str | None = None

    def __contains__(self, name: str) -> bool:
        return name in self.attributes

    def get(self, name: str) -> dict | None:
        return self.attributes.get(name)

    @classmethod
    def from_hal(cls, doc: dict) -> "SchemaResource":
        links = doc.get("_links", {})
        attributes = {k: v for k, v in doc.items() if not k.startswith("_")}
        base = LinkRef.from_hal(links.get("baseSchema"))
        self_link = LinkRef.from_hal(links.get("self"))
        return cls(
            href=self_link.href if self_link else None,
            attributes=attributes,
            attribute_groups=doc.get("_attributeGroups"),
            base_schema_href=base.href if base else None,
        )


@dataclass
class QueryResource:
    name: str | None
    href: str | None = None
    filters: list = field(default_factory=list)
    source: dict = field(default_factory=dict)

    @classmethod
    def from_hal(cls, doc: dict) -> "QueryResource":
        self_link = LinkRef.from_hal(doc.get("_links", {}).get("self"))
        return cls(
            name=doc.get("name"),
            href=self_link.href if self_link else None,
            filters=list(doc.get("filters", [])),
            source=doc,
        )


@dataclass
class WorkPackageResource:
    id: str
    is_new: bool
    schema: SchemaResource
    project: LinkRef | None = None
    type: LinkRef | None = None
    attachments: list[dict] | None = None
    values: dict[str, Any] = field(default_factory=dict)

    def get(self, name: str) -> Any:
        # project and type are links held on the resource itself
        if name in ("project", "type"):
            return getattr(self, name)
        return self.values.get(name)

    def with_changes(self, **changes) -> "WorkPackageResource":
        values = dict(self.values)
        values.update(changes.pop("values", {}))
        return replace(self, values=values, **changes)

    @classmethod
    def from_hal(cls, doc: dict, schema: SchemaResource, is_new: bool = False) -> "WorkPackageResource":
        links = doc.get("_links", {})
        values: dict[str, Any] = {}
        for name in schema.attributes:
            if name in doc:
                values[name] = copy.deepcopy(doc[name])
            elif name in links:
                values[name] = LinkRef.from_hal(links[name])
        embedded = doc.get("_embedded", {})
        attachments = None
        if "attachments" in embedded:
            attachments = list(embedded["attachments"].get("_embedded", {}).get("elements", []))
        wp_id = doc.get("id")
        return cls(
            id=str(wp_id) if wp_id is not None and not is_new else "new",
            is_new=is_new,
            schema=schema,
            project=LinkRef.from_hal(links.get("project")),
            type=LinkRef.from_hal(links.get("type")),
            attachments=attachments,
            values=values,
        )
