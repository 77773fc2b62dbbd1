from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from projectboard.core.config import settings
from projectboard.core.deps import get_db, get_current_user
from projectboard.core.i18n import current_locale
from projectboard.core.logging import logger
from projectboard.db.models.user import Role
from projectboard.schemas.auth import LoginIn, TokenOut, UserOut
from projectboard.crud.users import get_user_by_login
from projectboard.core.security import verify_password, create_access_token

router = APIRouter()

@router.post("/login", response_model=TokenOut)
def login(data: LoginIn, db: Session = Depends(get_db)):
    user = get_user_by_login(db, data.login)
    if not user or not user.is_active or not verify_password(data.password, user.password_hash):
        logger.info("login_failed", login=data.login)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    token = create_access_token(user.login, admin=user.role == Role.admin.value)
    logger.info("login_succeeded", user_id=user.id)
    return TokenOut(access_token=token, expires_in=settings.JWT_EXPIRES_MIN * 60)

@router.get("/me", response_model=UserOut)
def me(user = Depends(get_current_user)):
    return UserOut(id=user.id, login=user.login, full_name=user.full_name, role=user.role,
                   is_admin=user.role == Role.admin.value, locale=current_locale())
