"""
Editing state for work packages shown in the single view.

``temporary_edit_resource`` is the resource with the pending (unsaved)
changes applied. Changing ``type`` or ``project`` swaps in the schema of the
new (project, type) pair.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from projectboard.api.v3 import paths
from projectboard.core.logging import logger
from projectboard.views.reactive import InputState
from projectboard.views.resources import LinkRef, SchemaResource, WorkPackageResource

SchemaLoader = Callable[[str], SchemaResource]


@dataclass
class CurrentProjectService:
    id: int | None = None
    identifier: str | None = None
    name: str | None = None

    @property
    def in_project_context(self) -> bool:
        return self.id is not None

    @property
    def api_v3_path(self) -> str | None:
        return paths.project(self.id) if self.id is not None else None


class WorkPackageEditingService:
    def __init__(self, schema_loader: SchemaLoader):
        self.schema_loader = schema_loader
        self._pristine: dict[str, WorkPackageResource] = {}
        self._changes: dict[str, dict[str, Any]] = {}
        self._states: dict[str, InputState[WorkPackageResource]] = {}

    def start_editing(self, resource: WorkPackageResource) -> InputState[WorkPackageResource]:
        self._pristine[resource.id] = resource
        self._changes[resource.id] = {}
        state = self.temporary_edit_resource(resource.id)
        state.put_value(resource)
        return state

    def temporary_edit_resource(self, work_package_id: str) -> InputState[WorkPackageResource]:
        if work_package_id not in self._states:
            self._states[work_package_id] = InputState()
        return self._states[work_package_id]

    def changes(self, work_package_id: str) -> dict[str, Any]:
        return dict(self._changes.get(work_package_id, {}))

    def change(self, work_package_id: str, attribute: str, value: Any) -> WorkPackageResource:
        if work_package_id not in self._pristine:
            raise KeyError(f"work package {work_package_id} is not being edited")
        self._changes[work_package_id][attribute] = value
        resource = self._apply(self._pristine[work_package_id], self._changes[work_package_id])
        self.temporary_edit_resource(work_package_id).put_value(resource)
        logger.debug("work_package_changed", work_package_id=work_package_id, attribute=attribute)
        return resource

    def reset(self, work_package_id: str) -> None:
        self._changes[work_package_id] = {}
        self.temporary_edit_resource(work_package_id).put_value(self._pristine[work_package_id])

    def stop_editing(self, work_package_id: str) -> None:
        self._pristine.pop(work_package_id, None)
        self._changes.pop(work_package_id, None)
        state = self._states.pop(work_package_id, None)
        if state is not None:
            state.complete()

    def _apply(self, pristine: WorkPackageResource, changes: dict[str, Any]) -> WorkPackageResource:
        project = changes.get("project", pristine.project)
        type_ = changes.get("type", pristine.type)
        schema = pristine.schema
        if ("project" in changes or "type" in changes) and project and type_:
            href = paths.work_package_schema(project.id_from_link, type_.id_from_link)
            if href != (schema.base_schema_href or schema.href):
                schema = self.schema_loader(href)
        values = {k: v for k, v in changes.items() if k not in ("project", "type")}
        return pristine.with_changes(
            project=project if isinstance(project, LinkRef) else pristine.project,
            type=type_ if isinstance(type_, LinkRef) else pristine.type,
            schema=schema,
            values=values,
        )
