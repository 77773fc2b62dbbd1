from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from projectboard.core.cache import CacheStore
from projectboard.core.deps import authorize, get_cache, get_db, get_user_context
from projectboard.core.logging import logger
from projectboard.core.permissions import Permission, UserContext
from projectboard.crud.projects import get_project
from projectboard.crud.types import get_type
from projectboard.crud.work_packages import WorkPackageInvalid, add_attachment, get_work_package, update_work_package
from projectboard.db.models.work_package import WorkPackage
from projectboard.api.v3 import paths
from projectboard.representers.schema import WorkPackageSchemaRepresenter
from projectboard.representers.work_package import WorkPackageRepresenter
from projectboard.schemas.work_package import AttachmentIn, WorkPackageUpdate
from projectboard.services.schema import WorkPackageSchema

router = APIRouter()

def visible_work_package(work_package_id: int, db: Session = Depends(get_db),
                         ctx: UserContext = Depends(get_user_context)) -> WorkPackage:
    wp = get_work_package(db, work_package_id)
    if not wp or not ctx.allowed_to(Permission.view_work_packages, wp.project):
        raise HTTPException(status_code=404, detail="Work package not found")
    return wp

# declared before /{work_package_id} so "schemas" is not parsed as an id
@router.get("/schemas/{schema_id}")
def get_schema(schema_id: str, db: Session = Depends(get_db), ctx: UserContext = Depends(get_user_context),
               cache: CacheStore = Depends(get_cache)):
    try:
        project_id, type_id = paths.parse_schema_id(schema_id)
    except ValueError:
        raise HTTPException(status_code=404, detail="Schema not found")
    project = get_project(db, project_id)
    ty = get_type(db, type_id)
    if not project or not ty or not ctx.allowed_to(Permission.view_work_packages, project):
        raise HTTPException(status_code=404, detail="Schema not found")
    return WorkPackageSchemaRepresenter(WorkPackageSchema(project, ty), ctx, cache).to_dict()

@router.get("/{work_package_id}")
def get_work_package_endpoint(wp: WorkPackage = Depends(visible_work_package),
                              ctx: UserContext = Depends(get_user_context), cache: CacheStore = Depends(get_cache)):
    return WorkPackageRepresenter(wp, ctx, cache).to_dict()

@router.patch("/{work_package_id}")
def patch_work_package(data: WorkPackageUpdate, wp: WorkPackage = Depends(visible_work_package),
                       db: Session = Depends(get_db), ctx: UserContext = Depends(get_user_context),
                       cache: CacheStore = Depends(get_cache)):
    authorize(ctx, Permission.edit_work_packages, wp.project)
    try:
        wp = update_work_package(db, wp, data)
    except WorkPackageInvalid as e:
        raise HTTPException(status_code=422, detail=e.errors)
    logger.info("work_package_updated", work_package_id=wp.id)
    return WorkPackageRepresenter(wp, ctx, cache).to_dict()

@router.post("/{work_package_id}/attachments", status_code=201)
def post_attachment(data: AttachmentIn, wp: WorkPackage = Depends(visible_work_package),
                    db: Session = Depends(get_db), ctx: UserContext = Depends(get_user_context)):
    authorize(ctx, Permission.edit_work_packages, wp.project)
    a = add_attachment(db, wp, data)
    logger.info("attachment_added", work_package_id=wp.id, attachment_id=a.id)
    return {"_type": "Attachment", "id": a.id, "fileName": a.file_name, "fileSize": a.filesize,
            "_links": {"self": {"href": paths.attachment(a.id), "title": a.file_name}}}
