from projectboard.api.v3 import paths
from projectboard.core.i18n import t
from projectboard.representers.base import Representer, link
from projectboard.services.schema import ATTRIBUTE_GROUP, QUERY_GROUP, WorkPackageSchema


class WorkPackageSchemaRepresenter(Representer):
    """Schema of a (project, type) pair.

    With ``form=True`` the schema is the one embedded in a form: it links its
    ``baseSchema`` so clients can tell which persisted schema it derives from.
    """

    type_name = "Schema"

    def __init__(self, represented: WorkPackageSchema, current_user, cache=None, form: bool = False):
        super().__init__(represented, current_user, cache)
        self.form = form

    def cache_key_parts(self) -> list[str]:
        return [self.represented.cache_key, "form" if self.form else "schema"]

    def _allowed_values(self, name: str) -> dict | None:
        project_id = self.represented.project.id
        hrefs = {
            "category": paths.categories_by_project(project_id),
            "version": paths.versions_by_project(project_id),
            "type": paths.types_by_project(project_id),
            "project": paths.projects(),
        }
        if name not in hrefs:
            return None
        return {"allowedValues": {"href": hrefs[name]}}

    def properties(self) -> dict:
        doc: dict = {}
        for attr in self.represented.attributes:
            entry = {
                "type": attr.type,
                "name": t(attr.label_key),
                "required": attr.required,
                "hasDefault": False,
                "writable": attr.writable,
            }
            allowed = self._allowed_values(attr.name)
            if allowed:
                entry["_links"] = allowed
            doc[attr.name] = entry
        doc["_attributeGroups"] = [self._group(g) for g in self.represented.attribute_groups]
        return doc

    def _group(self, group: dict) -> dict:
        name = group.get("name") or t(group["key"])
        if group["type"] == "query":
            query = dict(group["query"])
            query.setdefault("_type", "Query")
            query.setdefault("name", name)
            return {
                "_type": QUERY_GROUP,
                "name": name,
                "relationType": group.get("relation_type"),
                "_embedded": {"query": query},
            }
        return {"_type": ATTRIBUTE_GROUP, "name": name, "attributes": list(group["attributes"])}

    @link("self")
    def self_link(self):
        if self.form:
            return {"href": paths.create_project_work_package_form(self.represented.project.id)}
        return {"href": paths.work_package_schema(self.represented.project.id, self.represented.type.id)}

    @link("baseSchema")
    def base_schema(self):
        if not self.form:
            return None
        return {"href": paths.work_package_schema(self.represented.project.id, self.represented.type.id)}
