from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from projectboard.core.deps import get_db, require_admin
from projectboard.core.i18n import current_locale
from projectboard.core.logging import logger
from projectboard.db.models.user import Role
from projectboard.schemas.admin import MemberIn, MemberOut, TypeGroupsIn, TypeIn, UserCreateIn
from projectboard.schemas.auth import UserOut
from projectboard.crud.members import add_member, list_members
from projectboard.crud.projects import get_project, touch_project
from projectboard.crud.types import create_type, get_type, set_attribute_groups
from projectboard.crud.users import create_user, list_users

router = APIRouter()

def _user_out(u) -> UserOut:
    return UserOut(id=u.id, login=u.login, full_name=u.full_name, role=u.role, is_admin=u.role == Role.admin.value,
                   locale=current_locale())

@router.get("/users", response_model=list[UserOut])
def users(db: Session = Depends(get_db), _user=Depends(require_admin)):
    return [_user_out(u) for u in list_users(db)]

@router.post("/users", response_model=UserOut)
def create_user_endpoint(data: UserCreateIn, db: Session = Depends(get_db), _user=Depends(require_admin)):
    try:
        u = create_user(db, data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    logger.info("user_created", user_id=u.id, login=u.login)
    return _user_out(u)

@router.get("/projects/{project_id}/members", response_model=list[MemberOut])
def members(project_id: int, db: Session = Depends(get_db), _user=Depends(require_admin)):
    if not get_project(db, project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return [MemberOut(id=m.id, project_id=m.project_id, user_id=m.user_id, role=m.role)
            for m in list_members(db, project_id)]

@router.post("/projects/{project_id}/members", response_model=MemberOut)
def create_member(project_id: int, data: MemberIn, db: Session = Depends(get_db), _user=Depends(require_admin)):
    p = get_project(db, project_id)
    if not p:
        raise HTTPException(status_code=404, detail="Project not found")
    try:
        m = add_member(db, p, data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    logger.info("member_saved", project_id=p.id, user_id=m.user_id, role=m.role)
    return MemberOut(id=m.id, project_id=m.project_id, user_id=m.user_id, role=m.role)

@router.post("/types")
def create_type_endpoint(data: TypeIn, db: Session = Depends(get_db), _user=Depends(require_admin)):
    try:
        ty = create_type(db, data)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    logger.info("type_created", type_id=ty.id, name=ty.name)
    return {"id": ty.id, "name": ty.name, "is_milestone": ty.is_milestone}

@router.post("/projects/{project_id}/types/{type_id}")
def enable_type(project_id: int, type_id: int, db: Session = Depends(get_db), _user=Depends(require_admin)):
    p = get_project(db, project_id)
    ty = get_type(db, type_id)
    if not p or not ty:
        raise HTTPException(status_code=404, detail="Not found")
    if ty not in p.types:
        p.types.append(ty)
        touch_project(db, p)
    return {"project_id": p.id, "type_ids": [t.id for t in p.types]}

@router.put("/types/{type_id}/attribute_groups")
def put_type_attribute_groups(type_id: int, data: TypeGroupsIn, db: Session = Depends(get_db),
                              _user=Depends(require_admin)):
    ty = get_type(db, type_id)
    if not ty:
        raise HTTPException(status_code=404, detail="Type not found")
    try:
        ty = set_attribute_groups(db, ty, data.attribute_groups)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    logger.info("type_attribute_groups_updated", type_id=ty.id, groups=len(ty.attribute_groups or []))
    return {"id": ty.id, "attribute_groups": ty.attribute_groups}
