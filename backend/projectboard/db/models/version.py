from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from projectboard.db.base import Base
from projectboard.db.models._mixins import TimestampMixin

class Version(Base, TimestampMixin):
    __tablename__ = "version"

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("project.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(256))
    status: Mapped[str] = mapped_column(String(32), default="open")  # open|locked|closed

    project = relationship("Project", back_populates="versions")
