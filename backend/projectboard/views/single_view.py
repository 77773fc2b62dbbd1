"""
Work package single view.

Regroups a work package's attributes by its schema's attribute groups and
rebuilds the groups whenever the resource context (novelty, schema, project)
changes. Group, attachment list and attachment upload rendering are resolved
through plugin hooks, last registration winning.
"""

from __future__ import annotations

import secrets
import string
from dataclasses import dataclass, field
from typing import Any, Callable

from reactivex import operators as ops
from reactivex.disposable import CompositeDisposable
from reactivex.subject import Subject

from projectboard.core.i18n import t
from projectboard.core.logging import logger
from projectboard.services.schema import ATTRIBUTE_GROUP
from projectboard.views.browser import BrowserDetector
from projectboard.views.cleanup import PortalCleanupService
from projectboard.views.display_fields import DisplayField, DisplayFieldService
from projectboard.views.editing import CurrentProjectService, WorkPackageEditingService
from projectboard.views.hooks import HookService
from projectboard.views.paths import PathHelper
from projectboard.views.reactive import InputState
from projectboard.views.resources import QueryResource, WorkPackageResource

OVERFLOWING_CONTAINER_ATTRIBUTE = "overflowingIdentifier"
OVERFLOWING_PREFIX = ".__overflowing_"

_ALPHABET = string.ascii_letters + string.digits


def random_string(length: int = 16) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


@dataclass
class FieldDescriptor:
    name: str
    label: str
    span_all: bool = False
    multiple: bool = False
    field: DisplayField | None = None
    fields: list[DisplayField] | None = None

    def to_dict(self) -> dict:
        doc: dict[str, Any] = {
            "name": self.name,
            "label": self.label,
            "spanAll": self.span_all,
            "multiple": self.multiple,
        }
        if self.multiple:
            doc["fields"] = [{"name": f.name, "label": f.label, "value": f.render()} for f in self.fields or []]
        elif self.field is not None:
            doc["value"] = self.field.render()
        return doc


@dataclass
class GroupDescriptor:
    name: str
    id: str
    members: list
    type: str
    isolated: bool = False
    query: QueryResource | None = None
    relation_type: str | None = None

    def to_dict(self) -> dict:
        doc: dict[str, Any] = {"name": self.name, "id": self.id, "type": self.type, "isolated": self.isolated}
        if self.query is not None:
            doc["relationType"] = self.relation_type
            doc["query"] = {"name": self.query.name, "href": self.query.href, "filters": self.query.filters}
        else:
            doc["members"] = [m.to_dict() for m in self.members]
        return doc


@dataclass(frozen=True)
class ResourceContextChange:
    is_new: bool
    schema: str | None
    project: str | None


@dataclass
class ProjectContext:
    matches: bool
    href: str | None
    field: list[FieldDescriptor] | None = None


@dataclass
class ViewElement:
    """The rendered container, as far as the view reads it back.

    ``group_data`` maps a group name to the data attributes set on its
    container, e.g. the overflow marker written by responsive collapsing.
    """

    group_data: dict[str, dict[str, str]] = field(default_factory=dict)

    def data(self, group_name: str, key: str) -> str | None:
        return self.group_data.get(group_name, {}).get(key)

    def mark_overflowing(self, group_name: str, identifier: str) -> None:
        self.group_data.setdefault(group_name, {})[OVERFLOWING_CONTAINER_ATTRIBUTE] = OVERFLOWING_PREFIX + identifier


class WorkPackageSingleView:
    def __init__(
        self,
        work_package: WorkPackageResource,
        *,
        editing: WorkPackageEditingService,
        display_fields: DisplayFieldService,
        hooks: HookService,
        current_project: CurrentProjectService | None = None,
        path_helper: PathHelper | None = None,
        cleanup: PortalCleanupService | None = None,
        browser: BrowserDetector | None = None,
        element: ViewElement | None = None,
        translate: Callable[..., str] = t,
        show_project: bool = False,
    ):
        self.work_package = work_package
        self.editing = editing
        self.display_fields = display_fields
        self.hooks = hooks
        self.current_project = current_project or CurrentProjectService()
        self.path_helper = path_helper or PathHelper()
        self.cleanup = cleanup or PortalCleanupService()
        self.browser = browser or BrowserDetector()
        self.element = element or ViewElement()
        self.translate = translate
        self.show_project = show_project

        self.grouped_fields: list[GroupDescriptor] = []
        self.project_context: ProjectContext | None = None
        # structural changes to the view, e.g. a changed type or project
        self.resource_context_change: InputState[ResourceContextChange] = InputState()

        self._destroyed = Subject()
        self._subscriptions = CompositeDisposable()
        self.text = {
            "attachments": {"label": translate("label_attachments")},
            "project": {
                "required": translate("project.required_outside_context"),
                "context": translate("project.context"),
                "switch_to": translate("project.click_to_switch_context"),
            },
            "fields": {"description": translate("attributes.description")},
            "description": {"placeholder": translate("work_packages.placeholders.description")},
            "info_row": {
                "created_by": translate("label_created_by"),
                "last_updated_on": translate("label_last_updated_on"),
            },
        }

    def init(self) -> None:
        edit_state = self.editing.temporary_edit_resource(self.work_package.id)

        self._subscriptions.add(
            self.resource_context_change.values()
            .pipe(
                ops.take_until(self._destroyed),
                ops.distinct_until_changed(),
                ops.map(lambda _: edit_state.value),
            )
            .subscribe(on_next=self._rebuild)
        )

        # every update to the edited resource may change its context,
        # e.g. a new type selected on a new work package
        self._subscriptions.add(
            edit_state.values()
            .pipe(ops.take_until(self._destroyed))
            .subscribe(on_next=lambda resource: self.resource_context_change.put_value(self.context_from(resource)))
        )

    def destroy(self) -> None:
        self._destroyed.on_next(True)
        self._destroyed.on_completed()
        self._subscriptions.dispose()
        self.cleanup.clear()

    def _rebuild(self, resource: WorkPackageResource) -> None:
        is_new = self.work_package.is_new

        if resource.project is None:
            self.project_context = ProjectContext(matches=False, href=None)
        else:
            self.project_context = ProjectContext(
                href=self.path_helper.project_work_package_path(resource.project.id_from_link, self.work_package.id),
                matches=resource.project.href == self.current_project.api_v3_path,
            )

        if is_new and (not self.current_project.in_project_context or self.show_project):
            self.project_context.field = self.get_fields(resource, ["project"])

        self.grouped_fields = self.rebuild_grouped_fields(resource, resource.schema.attribute_groups)
        logger.debug("single_view_rebuilt", work_package_id=self.work_package.id, groups=len(self.grouped_fields))

    @property
    def show_wrong_project_notice(self) -> bool:
        return self.project_context is not None and not self.project_context.matches

    def should_hide_group(self, group: GroupDescriptor) -> bool:
        """Hide empty groups (e.g. only custom fields inactive in this project) and queries of new work packages."""
        is_empty = len(group.members) == 0
        query_in_new = self.work_package.is_new and group.query is not None
        return is_empty or query_in_new

    def attribute_group_component(self, group: GroupDescriptor):
        return self._last_registered("attributeGroupComponent", group, self.work_package)

    def attachment_list_component(self):
        return self._last_registered("workPackageAttachmentListComponent", self.work_package)

    def attachment_upload_component(self):
        return self._last_registered("workPackageAttachmentUploadComponent", self.work_package)

    def _last_registered(self, hook: str, *args):
        candidates = self.hooks.call(hook, *args)
        return candidates[-1] if candidates else None

    @property
    def id_label(self) -> str:
        return f"#{self.work_package.id}"

    @property
    def project_context_text(self) -> str:
        project = self.work_package.project
        path = self.path_helper.project_path(project.id_from_link)
        link = f'<a href="{path}">{project.title}</a>'
        return self.translate("project.work_package_belongs_to", projectname=link)

    @property
    def enable_two_column_layout(self) -> bool:
        return self.work_package.is_new and not self.browser.is_edge

    def rebuild_grouped_fields(self, resource: WorkPackageResource, attribute_groups: list[dict] | None) -> list[GroupDescriptor]:
        if not attribute_groups:
            return []

        groups = []
        for group in attribute_groups:
            group_id = self._attribute_group_id(group) or random_string(16)
            if group["_type"] == ATTRIBUTE_GROUP:
                groups.append(GroupDescriptor(
                    name=group["name"],
                    id=group_id,
                    members=self.get_fields(resource, group["attributes"]),
                    type=group["_type"],
                    isolated=False,
                ))
            else:
                query = group["_embedded"]["query"]
                groups.append(GroupDescriptor(
                    name=group["name"],
                    id=group_id,
                    query=QueryResource.from_hal(query),
                    relation_type=group.get("relationType"),
                    members=[query],
                    type=group["_type"],
                    isolated=True,
                ))
        return groups

    def get_fields(self, resource: WorkPackageResource, field_names: list[str]) -> list[FieldDescriptor]:
        """Map attribute names to descriptors. ``date`` expands to start and due dates unless the schema has it."""
        descriptors = []
        for name in field_names:
            if name == "date":
                descriptors.append(self._date_field(resource))
                continue

            if name not in resource.schema:
                logger.debug("unknown_schema_field", field=name, schema=resource.schema.href)
                continue

            display = self._display_field(resource, name)
            descriptors.append(FieldDescriptor(
                name=name,
                label=display.label,
                multiple=False,
                span_all=display.is_formattable,
                field=display,
            ))
        return descriptors

    def _date_field(self, resource: WorkPackageResource) -> FieldDescriptor:
        descriptor = FieldDescriptor(name="date", label=self.translate("attributes.date"), multiple=False)
        if "date" in resource.schema:
            descriptor.field = self._display_field(resource, "date")
        else:
            descriptor.fields = [self._display_field(resource, "startDate"), self._display_field(resource, "dueDate")]
            descriptor.multiple = True
        return descriptor

    def context_from(self, resource: WorkPackageResource) -> ResourceContextChange:
        schema = resource.schema
        schema_href = schema.base_schema_href or schema.href
        return ResourceContextChange(
            is_new=resource.is_new,
            schema=schema_href,
            project=resource.project.href if resource.project else None,
        )

    def _display_field(self, resource: WorkPackageResource, name: str) -> DisplayField:
        return self.display_fields.get_field(
            resource,
            name,
            resource.schema.get(name),
            {"container": "single-view", "options": {}},
        )

    def _attribute_group_id(self, group: dict) -> str:
        identifier = self.element.data(group["name"], OVERFLOWING_CONTAINER_ATTRIBUTE)
        if identifier:
            return identifier.replace(OVERFLOWING_PREFIX, "")
        return ""

    def render(self) -> dict:
        """Visible groups and attachment sections, rendered by the registered components where present."""
        groups = []
        for group in self.grouped_fields:
            if self.should_hide_group(group):
                continue
            component = self.attribute_group_component(group)
            groups.append(component(group, self.work_package) if component else group.to_dict())

        attachments = None
        if self.work_package.attachments is not None:
            component = self.attachment_list_component()
            if component:
                attachments = component(self.work_package)
            else:
                attachments = [
                    {"id": a.get("id"), "fileName": a.get("fileName"), "fileSize": a.get("fileSize")}
                    for a in self.work_package.attachments
                ]
        upload = self.attachment_upload_component()

        doc: dict[str, Any] = {
            "idLabel": self.id_label,
            "isNew": self.work_package.is_new,
            "twoColumnLayout": self.enable_two_column_layout,
            "groups": groups,
            "attachments": {"label": self.text["attachments"]["label"], "elements": attachments},
            "attachmentUpload": upload(self.work_package) if upload else None,
        }
        if self.project_context is not None:
            doc["projectContext"] = {
                "matches": self.project_context.matches,
                "href": self.project_context.href,
                "field": [f.to_dict() for f in self.project_context.field or []],
            }
            if not self.project_context.matches and self.work_package.project:
                doc["projectContext"]["text"] = self.project_context_text
        return doc
