"""Representers for the small project-scoped resources: types, categories and versions."""

from projectboard.api.v3 import paths
from projectboard.db.models._mixins import as_utc
from projectboard.representers.base import Representer, link


class TypeRepresenter(Representer):
    type_name = "Type"

    def cache_key_parts(self) -> list[str]:
        ty = self.represented
        stamp = f"{as_utc(ty.updated_at).timestamp():.6f}" if ty.updated_at else "new"
        return [f"types/{ty.id}-{stamp}"]

    def properties(self) -> dict:
        return {
            "id": self.represented.id,
            "name": self.represented.name,
            "position": self.represented.position,
            "isMilestone": self.represented.is_milestone,
        }

    @link("self")
    def self_link(self):
        return {"href": paths.type(self.represented.id), "title": self.represented.name}


class CategoryRepresenter(Representer):
    type_name = "Category"

    def cache_key_parts(self) -> list[str]:
        return [f"categories/{self.represented.id}-{self.represented.name}"]

    def properties(self) -> dict:
        return {"id": self.represented.id, "name": self.represented.name}

    @link("self")
    def self_link(self):
        return {"href": paths.category(self.represented.id), "title": self.represented.name}

    @link("project")
    def project(self):
        return {"href": paths.project(self.represented.project_id)}


class VersionRepresenter(Representer):
    type_name = "Version"

    def cache_key_parts(self) -> list[str]:
        v = self.represented
        stamp = f"{as_utc(v.updated_at).timestamp():.6f}" if v.updated_at else "new"
        return [f"versions/{v.id}-{stamp}"]

    def properties(self) -> dict:
        return {"id": self.represented.id, "name": self.represented.name, "status": self.represented.status}

    @link("self")
    def self_link(self):
        return {"href": paths.version(self.represented.id), "title": self.represented.name}

    @link("definingProject")
    def defining_project(self):
        return {"href": paths.project(self.represented.project_id)}
