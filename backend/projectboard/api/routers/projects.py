from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from projectboard.api.v3 import paths
from projectboard.core.cache import CacheStore
from projectboard.core.deps import authorize, get_cache, get_db, get_user_context, require_admin, visible_project
from projectboard.core.logging import logger
from projectboard.core.permissions import Permission, UserContext
from projectboard.crud.projects import create_project, list_visible_projects, update_project
from projectboard.crud.work_packages import WorkPackageInvalid, create_work_package, list_work_packages, resolve_type, validate
from projectboard.db.models.project import Project
from projectboard.representers.base import CollectionRepresenter
from projectboard.representers.form import WorkPackageFormRepresenter
from projectboard.representers.project import ProjectRepresenter
from projectboard.representers.simple import CategoryRepresenter, TypeRepresenter, VersionRepresenter
from projectboard.representers.work_package import WorkPackageRepresenter
from projectboard.schemas.project import ProjectCreate, ProjectUpdate
from projectboard.schemas.work_package import WorkPackageCreate, WorkPackageFormIn
from projectboard.services.schema import WorkPackageSchema

router = APIRouter()

@router.get("")
def get_projects(db: Session = Depends(get_db), ctx: UserContext = Depends(get_user_context),
                 cache: CacheStore = Depends(get_cache)):
    projects = list_visible_projects(db, ctx.user.id, admin=ctx.is_admin)
    return CollectionRepresenter(projects, paths.projects(), ctx, ProjectRepresenter, cache).to_dict()

@router.post("", status_code=201)
def post_project(data: ProjectCreate, db: Session = Depends(get_db), _admin=Depends(require_admin),
                 ctx: UserContext = Depends(get_user_context), cache: CacheStore = Depends(get_cache)):
    try:
        p = create_project(db, data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    logger.info("project_created", project_id=p.id, identifier=p.identifier)
    return ProjectRepresenter(p, ctx, cache).to_dict()

@router.get("/{project_id}")
def get_project_endpoint(project: Project = Depends(visible_project), ctx: UserContext = Depends(get_user_context),
                         cache: CacheStore = Depends(get_cache)):
    return ProjectRepresenter(project, ctx, cache).to_dict()

@router.patch("/{project_id}")
def patch_project(data: ProjectUpdate, project: Project = Depends(visible_project), db: Session = Depends(get_db),
                  ctx: UserContext = Depends(get_user_context), cache: CacheStore = Depends(get_cache)):
    authorize(ctx, Permission.edit_project, project)
    try:
        p = update_project(db, project, data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    logger.info("project_updated", project_id=p.id, updated_at=p.updated_at.isoformat())
    return ProjectRepresenter(p, ctx, cache).to_dict()

@router.get("/{project_id}/types")
def get_project_types(project: Project = Depends(visible_project), ctx: UserContext = Depends(get_user_context),
                      cache: CacheStore = Depends(get_cache)):
    if not ctx.allowed_to_any([Permission.view_work_packages, Permission.manage_types], project):
        raise HTTPException(status_code=403, detail="Forbidden")
    return CollectionRepresenter(project.types, paths.types_by_project(project.id), ctx, TypeRepresenter, cache).to_dict()

@router.get("/{project_id}/categories")
def get_project_categories(project: Project = Depends(visible_project), ctx: UserContext = Depends(get_user_context),
                           cache: CacheStore = Depends(get_cache)):
    return CollectionRepresenter(project.categories, paths.categories_by_project(project.id), ctx,
                                 CategoryRepresenter, cache).to_dict()

@router.get("/{project_id}/versions")
def get_project_versions(project: Project = Depends(visible_project), ctx: UserContext = Depends(get_user_context),
                         cache: CacheStore = Depends(get_cache)):
    return CollectionRepresenter(project.versions, paths.versions_by_project(project.id), ctx,
                                 VersionRepresenter, cache).to_dict()

@router.get("/{project_id}/work_packages")
def get_project_work_packages(project: Project = Depends(visible_project), db: Session = Depends(get_db),
                              ctx: UserContext = Depends(get_user_context), cache: CacheStore = Depends(get_cache)):
    authorize(ctx, Permission.view_work_packages, project)
    return CollectionRepresenter(list_work_packages(db, project.id), paths.work_packages_by_project(project.id),
                                 ctx, WorkPackageRepresenter, cache).to_dict()

@router.post("/{project_id}/work_packages", status_code=201)
def post_project_work_package(data: WorkPackageCreate, project: Project = Depends(visible_project),
                              db: Session = Depends(get_db), ctx: UserContext = Depends(get_user_context),
                              cache: CacheStore = Depends(get_cache)):
    authorize(ctx, Permission.add_work_packages, project)
    try:
        wp = create_work_package(db, project, data, author=ctx.user)
    except WorkPackageInvalid as e:
        raise HTTPException(status_code=422, detail=e.errors)
    logger.info("work_package_created", work_package_id=wp.id, project_id=project.id)
    return WorkPackageRepresenter(wp, ctx, cache).to_dict()

@router.post("/{project_id}/work_packages/form")
def post_project_work_package_form(data: WorkPackageFormIn, project: Project = Depends(visible_project),
                                   db: Session = Depends(get_db), ctx: UserContext = Depends(get_user_context)):
    authorize(ctx, Permission.add_work_packages, project)
    ty, errors = validate(db, project, data)
    if ty is None:
        ty = resolve_type(project, None)
    if ty is None:
        raise HTTPException(status_code=422, detail={"type": "type_not_enabled"})
    payload = data.model_dump(by_alias=True, exclude_none=True, mode="json")
    payload.pop("typeId", None)
    return WorkPackageFormRepresenter(WorkPackageSchema(project, ty), payload, ctx, errors).to_dict()
