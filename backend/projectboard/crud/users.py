from sqlalchemy.orm import Session
from projectboard.db.models.user import User
from projectboard.core.security import hash_password
from projectboard.schemas.admin import UserCreateIn

def get_user_by_login(db: Session, login: str) -> User | None:
    return db.query(User).filter(User.login == login).one_or_none()

def list_users(db: Session):
    return db.query(User).order_by(User.id).all()

def create_user(db: Session, data: UserCreateIn) -> User:
    if get_user_by_login(db, data.login):
        raise ValueError("login_taken")
    u = User(login=data.login, password_hash=hash_password(data.password), role=data.role.value,
             full_name=data.full_name)
    db.add(u)
    db.commit()
    db.refresh(u)
    return u
