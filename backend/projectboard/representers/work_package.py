from projectboard.api.v3 import paths
from projectboard.core.i18n import t
from projectboard.core.permissions import Permission
from projectboard.db.models._mixins import as_utc
from projectboard.representers.base import Representer, format_date, format_datetime, link


def _ref(href: str | None, title: str | None = None) -> dict:
    doc = {"href": href}
    if title is not None:
        doc["title"] = title
    return doc


def _stamp(record) -> str:
    if record is None:
        return "none"
    if record.updated_at is None:
        return f"{record.id}-new"
    return f"{record.id}-{as_utc(record.updated_at).timestamp():.6f}"


class WorkPackageRepresenter(Representer):
    type_name = "WorkPackage"
    checked_permissions = [Permission.edit_work_packages.value]

    def cache_key_parts(self) -> list[str]:
        # link titles come from the project, type, category, version and author
        wp = self.represented
        category = f"{wp.category.id}-{wp.category.name}" if wp.category else "none"
        return [
            wp.cache_key,
            wp.project.cache_key,
            f"types/{_stamp(wp.type)}",
            f"categories/{category}",
            f"versions/{_stamp(wp.version)}",
            f"authors/{_stamp(wp.author)}",
        ]

    def properties(self) -> dict:
        wp = self.represented
        doc = {
            "id": wp.id,
            "subject": wp.subject,
            "description": {"format": "markdown", "raw": wp.description or ""},
        }
        if wp.type.is_milestone:
            doc["date"] = format_date(wp.start_date or wp.due_date)
        else:
            doc["startDate"] = format_date(wp.start_date)
            doc["dueDate"] = format_date(wp.due_date)
        doc["createdAt"] = format_datetime(wp.created_at)
        doc["updatedAt"] = format_datetime(wp.updated_at)
        return doc

    def embedded(self) -> dict:
        elements = [
            {
                "_type": "Attachment",
                "id": a.id,
                "fileName": a.file_name,
                "fileSize": a.filesize,
                "contentType": a.content_type,
                "_links": {"self": _ref(paths.attachment(a.id), a.file_name)},
            }
            for a in self.represented.attachments
        ]
        return {
            "attachments": {
                "_type": "Collection",
                "total": len(elements),
                "count": len(elements),
                "_embedded": {"elements": elements},
                "_links": {"self": _ref(paths.attachments_by_work_package(self.represented.id))},
            }
        }

    @link("self")
    def self_link(self):
        return _ref(paths.work_package(self.represented.id), self.represented.subject)

    @link("schema")
    def schema(self):
        wp = self.represented
        return _ref(paths.work_package_schema(wp.project_id, wp.type_id))

    @link("project")
    def project(self):
        p = self.represented.project
        return _ref(paths.project(p.id), p.name)

    @link("type")
    def type(self):
        ty = self.represented.type
        return _ref(paths.type(ty.id), ty.name)

    @link("category")
    def category(self):
        c = self.represented.category
        return _ref(paths.category(c.id), c.name) if c else _ref(None)

    @link("version")
    def version(self):
        v = self.represented.version
        return _ref(paths.version(v.id), v.name) if v else _ref(None)

    @link("author")
    def author(self):
        u = self.represented.author
        return _ref(paths.user(u.id), u.full_name or u.login) if u else _ref(None)

    @link("attachments")
    def attachments(self):
        return _ref(paths.attachments_by_work_package(self.represented.id), t("label_attachments"))

    @link("update", gated_by=[Permission.edit_work_packages])
    def update(self):
        return {"href": paths.work_package_form(self.represented.id), "method": "post"}

    @link("updateImmediately", gated_by=[Permission.edit_work_packages])
    def update_immediately(self):
        return {"href": paths.work_package(self.represented.id), "method": "patch"}

    @link("addAttachment", gated_by=[Permission.edit_work_packages])
    def add_attachment(self):
        return {"href": paths.attachments_by_work_package(self.represented.id), "method": "post"}
