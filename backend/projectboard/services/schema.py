"""
Work package schemas: the attributes and attribute groups a (project, type)
pair exposes.
"""

from __future__ import annotations

from dataclasses import dataclass

from projectboard.db.models._mixins import as_utc
from projectboard.db.models.project import Project
from projectboard.db.models.type import Type


@dataclass(frozen=True)
class AttributeDef:
    name: str
    label_key: str
    type: str
    required: bool = False
    writable: bool = True


ATTRIBUTES: tuple[AttributeDef, ...] = (
    AttributeDef("id", "attributes.id", "Integer", required=True, writable=False),
    AttributeDef("subject", "attributes.subject", "String", required=True),
    AttributeDef("description", "attributes.description", "Formattable"),
    AttributeDef("project", "attributes.project", "Project", required=True),
    AttributeDef("type", "attributes.type", "Type", required=True),
    AttributeDef("startDate", "attributes.start_date", "Date"),
    AttributeDef("dueDate", "attributes.due_date", "Date"),
    AttributeDef("date", "attributes.date", "Date"),
    AttributeDef("category", "attributes.category", "Category"),
    AttributeDef("version", "attributes.version", "Version"),
    AttributeDef("author", "attributes.author", "User", required=True, writable=False),
    AttributeDef("createdAt", "attributes.created_at", "DateTime", required=True, writable=False),
    AttributeDef("updatedAt", "attributes.updated_at", "DateTime", required=True, writable=False),
)

DEFAULT_ATTRIBUTE_GROUPS: list[dict] = [
    {"type": "attribute", "key": "groups.people", "attributes": ["author"]},
    {"type": "attribute", "key": "groups.estimates_and_time", "attributes": []},
    {"type": "attribute", "key": "groups.details", "attributes": ["date", "category", "version"]},
    {"type": "attribute", "key": "groups.other", "attributes": []},
]

ATTRIBUTE_GROUP = "WorkPackageFormAttributeGroup"
QUERY_GROUP = "WorkPackageFormQueryGroup"


def attributes_for(type_: Type) -> list[AttributeDef]:
    """Milestones carry a single ``date``; every other type has start and due dates."""
    if type_.is_milestone:
        skip = {"startDate", "dueDate"}
    else:
        skip = {"date"}
    return [a for a in ATTRIBUTES if a.name not in skip]


def validate_attribute_groups(groups: list[dict]) -> list[dict]:
    known = {a.name for a in ATTRIBUTES}
    for g in groups:
        kind = g.get("type")
        if not g.get("name") and not g.get("key"):
            raise ValueError("attribute_group_name_missing")
        if kind == "attribute":
            attrs = g.get("attributes")
            if not isinstance(attrs, list) or any(a not in known for a in attrs):
                raise ValueError("attribute_group_unknown_attribute")
        elif kind == "query":
            if not isinstance(g.get("query"), dict):
                raise ValueError("attribute_group_query_missing")
        else:
            raise ValueError("attribute_group_invalid_type")
    return groups


@dataclass
class WorkPackageSchema:
    project: Project
    type: Type

    @property
    def id(self) -> str:
        return f"{self.project.id}-{self.type.id}"

    @property
    def attributes(self) -> list[AttributeDef]:
        return attributes_for(self.type)

    @property
    def attribute_groups(self) -> list[dict]:
        return self.type.attribute_groups or DEFAULT_ATTRIBUTE_GROUPS

    @property
    def cache_key(self) -> str:
        type_stamp = f"{as_utc(self.type.updated_at).timestamp():.6f}" if self.type.updated_at else "new"
        return f"schemas/{self.project.cache_key}/types/{self.type.id}-{type_stamp}"
