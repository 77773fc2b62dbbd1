from projectboard.api.v3 import paths
from projectboard.core.i18n import t
from projectboard.core.permissions import Permission
from projectboard.representers.base import Representer, format_datetime, link


class ProjectRepresenter(Representer):
    type_name = "Project"
    checked_permissions = [Permission.add_work_packages.value]

    def properties(self) -> dict:
        p = self.represented
        return {
            "id": p.id,
            "identifier": p.identifier,
            "name": p.name,
            "description": p.description,
            "createdAt": format_datetime(p.created_at),
            "updatedAt": format_datetime(p.updated_at),
        }

    @link("self")
    def self_link(self):
        return {"href": paths.project(self.represented.id), "title": self.represented.name}

    @link("createWorkPackage", gated_by=[Permission.add_work_packages])
    def create_work_package(self):
        return {
            "href": paths.create_project_work_package_form(self.represented.id),
            "method": "post",
        }

    @link("createWorkPackageImmediate", gated_by=[Permission.add_work_packages])
    def create_work_package_immediate(self):
        return {"href": paths.work_packages_by_project(self.represented.id), "method": "post"}

    @link("categories")
    def categories(self):
        return {"href": paths.categories_by_project(self.represented.id), "title": t("label_categories")}

    @link("versions")
    def versions(self):
        return {"href": paths.versions_by_project(self.represented.id), "title": t("label_versions")}

    @link("types", gated_by=[Permission.view_work_packages, Permission.manage_types])
    def types(self):
        return {"href": paths.types_by_project(self.represented.id), "title": t("label_types")}

    @link("workPackages", gated_by=[Permission.view_work_packages, Permission.manage_types])
    def work_packages(self):
        return {"href": paths.work_packages_by_project(self.represented.id), "title": t("label_work_packages")}
