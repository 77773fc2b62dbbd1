from sqlalchemy import JSON, Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from projectboard.db.base import Base
from projectboard.db.models._mixins import TimestampMixin

class Type(Base, TimestampMixin):
    __tablename__ = "type"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(256), unique=True)
    position: Mapped[int] = mapped_column(Integer, default=1)
    is_milestone: Mapped[bool] = mapped_column(Boolean, default=False)
    # [{"type": "attribute", "name": ..., "attributes": [...]},
    #  {"type": "query", "name": ..., "relation_type": ..., "query": {...}}]
    attribute_groups: Mapped[list | None] = mapped_column(JSON, nullable=True)
