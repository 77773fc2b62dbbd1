from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from projectboard.db.session import SessionLocal
from projectboard.core.cache import CacheStore, get_cache as _get_cache
from projectboard.core.permissions import Permission, UserContext
from projectboard.core.security import token_subject
from projectboard.db.models.project import Project
from projectboard.db.models.user import User, Role
from projectboard.crud.projects import get_project
from projectboard.crud.users import get_user_by_login

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_cache() -> CacheStore:
    return _get_cache()

def get_current_user(db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)) -> User:
    login = token_subject(token)
    if not login:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    user = get_user_by_login(db, login)
    if not user or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found/disabled")
    return user

def get_user_context(db: Session = Depends(get_db), user: User = Depends(get_current_user)) -> UserContext:
    return UserContext(user, db)

def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != Role.admin.value:
        raise HTTPException(status_code=403, detail="Forbidden")
    return user

def visible_project(project_id: int, db: Session = Depends(get_db),
                    ctx: UserContext = Depends(get_user_context)) -> Project:
    p = get_project(db, project_id)
    if not p or not ctx.allowed_to(Permission.view_project, p):
        raise HTTPException(status_code=404, detail="Project not found")
    return p

def authorize(ctx: UserContext, permission: Permission, project: Project) -> None:
    if not ctx.allowed_to(permission, project):
        raise HTTPException(status_code=403, detail="Forbidden")
