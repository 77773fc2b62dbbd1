from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship
from enum import Enum

from projectboard.db.base import Base
from projectboard.db.models._mixins import TimestampMixin

class Role(str, Enum):
    admin = "Admin"
    user = "User"

class User(Base, TimestampMixin):
    __tablename__ = "user"

    id: Mapped[int] = mapped_column(primary_key=True)
    login: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    full_name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(256))
    role: Mapped[str] = mapped_column(String(32), default=Role.user.value)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    memberships = relationship("Member", back_populates="user", cascade="all, delete-orphan")
