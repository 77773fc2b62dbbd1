from fastapi import APIRouter, Depends, Header, HTTPException, Query
from sqlalchemy.orm import Session

from projectboard.api.routers.work_packages import visible_work_package
from projectboard.api.v3 import paths
from projectboard.core.cache import CacheStore
from projectboard.core.deps import authorize, get_cache, get_db, get_user_context, visible_project
from projectboard.core.permissions import Permission, UserContext
from projectboard.crud.projects import get_project
from projectboard.crud.types import get_type
from projectboard.crud.work_packages import resolve_type
from projectboard.db.models.project import Project
from projectboard.db.models.work_package import WorkPackage
from projectboard.representers.form import WorkPackageFormRepresenter
from projectboard.representers.schema import WorkPackageSchemaRepresenter
from projectboard.representers.work_package import WorkPackageRepresenter
from projectboard.services.schema import WorkPackageSchema
from projectboard.views.browser import BrowserDetector
from projectboard.views.display_fields import default_display_field_service
from projectboard.views.editing import CurrentProjectService, WorkPackageEditingService
from projectboard.views.hooks import HookService, get_hook_service
from projectboard.views.resources import LinkRef, SchemaResource, WorkPackageResource
from projectboard.views.single_view import WorkPackageSingleView

router = APIRouter()

def _schema_loader(db: Session, ctx: UserContext, cache: CacheStore):
    def load(href: str) -> SchemaResource:
        project_id, type_id = paths.parse_schema_id(href.rsplit("/", 1)[-1])
        project = get_project(db, project_id)
        ty = get_type(db, type_id)
        if not project or not ty:
            raise LookupError(href)
        doc = WorkPackageSchemaRepresenter(WorkPackageSchema(project, ty), ctx, cache).to_dict()
        return SchemaResource.from_hal(doc)
    return load

def _current_project(db: Session, ctx: UserContext, project_id: int | None) -> CurrentProjectService:
    if project_id is None:
        return CurrentProjectService()
    p = get_project(db, project_id)
    if not p or not ctx.allowed_to(Permission.view_project, p):
        raise HTTPException(status_code=404, detail="Project not found")
    return CurrentProjectService(id=p.id, identifier=p.identifier, name=p.name)

def _render(resource: WorkPackageResource, editing: WorkPackageEditingService, hooks: HookService,
            current_project: CurrentProjectService, user_agent: str | None, show_project: bool,
            type_change: LinkRef | None = None) -> dict:
    editing.start_editing(resource)
    view = WorkPackageSingleView(
        resource,
        editing=editing,
        display_fields=default_display_field_service(),
        hooks=hooks,
        current_project=current_project,
        browser=BrowserDetector(user_agent),
        show_project=show_project,
    )
    view.init()
    try:
        if type_change is not None and type_change != resource.type:
            editing.change(resource.id, "type", type_change)
        return view.render()
    finally:
        view.destroy()
        editing.stop_editing(resource.id)

@router.get("/work_packages/{work_package_id}/single_view")
def work_package_single_view(
    wp: WorkPackage = Depends(visible_work_package),
    project_id: int | None = Query(None, alias="project"),
    type_id: int | None = Query(None),
    show_project: bool = Query(False),
    user_agent: str | None = Header(None),
    db: Session = Depends(get_db),
    ctx: UserContext = Depends(get_user_context),
    cache: CacheStore = Depends(get_cache),
    hooks: HookService = Depends(get_hook_service),
):
    type_change = None
    if type_id is not None:
        ty = resolve_type(wp.project, type_id)
        if ty is None:
            raise HTTPException(status_code=422, detail={"type": "type_not_enabled"})
        type_change = LinkRef(href=paths.type(ty.id), title=ty.name)

    load_schema = _schema_loader(db, ctx, cache)
    doc = WorkPackageRepresenter(wp, ctx, cache).to_dict()
    schema = load_schema(doc["_links"]["schema"]["href"])
    resource = WorkPackageResource.from_hal(doc, schema)
    return _render(resource, WorkPackageEditingService(load_schema), hooks,
                   _current_project(db, ctx, project_id), user_agent, show_project, type_change)

@router.get("/projects/{project_id}/work_packages/new/single_view")
def new_work_package_single_view(
    project: Project = Depends(visible_project),
    type_id: int | None = Query(None),
    in_project: bool = Query(True),
    show_project: bool = Query(False),
    user_agent: str | None = Header(None),
    db: Session = Depends(get_db),
    ctx: UserContext = Depends(get_user_context),
    cache: CacheStore = Depends(get_cache),
    hooks: HookService = Depends(get_hook_service),
):
    authorize(ctx, Permission.add_work_packages, project)
    ty = resolve_type(project, type_id)
    if ty is None:
        raise HTTPException(status_code=422, detail={"type": "type_not_enabled"})

    form = WorkPackageFormRepresenter(WorkPackageSchema(project, ty), {"subject": ""}, ctx).to_dict()
    schema = SchemaResource.from_hal(form["_embedded"]["schema"])
    resource = WorkPackageResource.from_hal(form["_embedded"]["payload"], schema, is_new=True)
    current = _current_project(db, ctx, project.id) if in_project else CurrentProjectService()
    return _render(resource, WorkPackageEditingService(_schema_loader(db, ctx, cache)), hooks,
                   current, user_agent, show_project)
