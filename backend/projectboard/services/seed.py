from sqlalchemy.orm import Session
from projectboard.db.session import SessionLocal
from projectboard.core.config import settings
from projectboard.core.logging import logger
from projectboard.crud.users import get_user_by_login, create_user
from projectboard.crud.projects import list_projects, create_project
from projectboard.crud.types import list_types, create_type
from projectboard.db.models.category import Category
from projectboard.db.models.user import Role
from projectboard.db.models.version import Version
from projectboard.schemas.admin import TypeIn, UserCreateIn
from projectboard.schemas.project import ProjectCreate

DEMO_TYPES = [
    TypeIn(name="Task", position=1),
    TypeIn(name="Milestone", position=2, is_milestone=True),
    TypeIn(
        name="Feature",
        position=3,
        attribute_groups=[
            {"type": "attribute", "key": "groups.details", "attributes": ["date", "category", "version"]},
            {"type": "attribute", "key": "groups.people", "attributes": ["author"]},
            {
                "type": "query",
                "key": "groups.children",
                "relation_type": "children",
                "query": {"filters": [{"parent": {"operator": "=", "values": ["{id}"]}}]},
            },
        ],
    ),
]

def seed_demo(db: Session | None = None):
    own_session = db is None
    db = db or SessionLocal()
    try:
        if settings.DEMO_ADMIN_LOGIN and settings.DEMO_ADMIN_PASSWORD:
            u = get_user_by_login(db, settings.DEMO_ADMIN_LOGIN)
            if not u:
                create_user(db, UserCreateIn(
                    login=settings.DEMO_ADMIN_LOGIN,
                    password=settings.DEMO_ADMIN_PASSWORD,
                    role=Role.admin,
                    full_name="Demo Admin",
                ))
        if not list_types(db):
            for data in DEMO_TYPES:
                create_type(db, data)
        # Create default project if none
        if not list_projects(db):
            p = create_project(db, ProjectCreate(identifier="demo", name="Demo project",
                                                 description="Seeded demo project"))
            db.add_all([Category(project_id=p.id, name="Backend"), Version(project_id=p.id, name="1.0")])
            db.commit()
            logger.info("demo_seeded", project_id=p.id)
    finally:
        if own_session:
            db.close()
