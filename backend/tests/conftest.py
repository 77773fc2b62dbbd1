import datetime as dt
import os

os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CACHE_BACKEND"] = "memory"
os.environ["SEED_DEMO"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from projectboard.core.cache import InMemoryCache, set_cache
from projectboard.core.deps import get_db
from projectboard.core.security import create_access_token
from projectboard.db.base import Base
from projectboard.db.models import Category, Member, Project, Type, User, Version, WorkPackage
from projectboard.db.models.user import Role


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    yield session
    session.close()


@pytest.fixture
def cache():
    c = InMemoryCache()
    set_cache(c)
    yield c
    set_cache(None)


@pytest.fixture
def client(db, cache):
    from projectboard.main import app

    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


class StubUserContext:
    """Grants exactly ``permissions`` on every project."""

    def __init__(self, permissions=()):
        self.permissions = {str(getattr(p, "value", p)) for p in permissions}
        self.checks = []

    def allowed_to(self, permission, project):
        name = str(getattr(permission, "value", permission))
        self.checks.append((name, getattr(project, "id", None)))
        return name in self.permissions

    def allowed_to_any(self, permissions, project):
        return any(self.allowed_to(p, project) for p in permissions)

    def preload(self, projects):
        pass


def make_user(db, login="alice", admin=False):
    u = User(login=login, full_name=login.title(), password_hash="x",
             role=Role.admin.value if admin else Role.user.value)
    db.add(u)
    db.commit()
    return u


def make_type(db, name="Task", milestone=False, groups=None, position=1):
    ty = Type(name=name, is_milestone=milestone, attribute_groups=groups, position=position)
    db.add(ty)
    db.commit()
    return ty


def make_project(db, identifier="demo", name="Demo", types=()):
    p = Project(identifier=identifier, name=name, description="A demo project")
    p.types = list(types)
    db.add(p)
    db.commit()
    return p


def add_member(db, user, project, role):
    m = Member(user_id=user.id, project_id=project.id, role=role)
    db.add(m)
    db.commit()
    return m


def make_work_package(db, project, ty, subject="Write docs", **kwargs):
    wp = WorkPackage(project_id=project.id, type_id=ty.id, subject=subject, **kwargs)
    db.add(wp)
    db.commit()
    db.refresh(wp)
    return wp


def auth_headers(user, **headers):
    return {"Authorization": f"Bearer {create_access_token(user.login)}", **headers}


@pytest.fixture
def world(db):
    """A project with two types, a category, a version, and users in different roles."""
    task = make_type(db, "Task", position=1)
    milestone = make_type(db, "Milestone", milestone=True, position=2)
    project = make_project(db, types=[task, milestone])
    db.add_all([Category(project_id=project.id, name="Backend"), Version(project_id=project.id, name="1.0")])
    db.commit()
    admin = make_user(db, "admin", admin=True)
    manager = make_user(db, "manager")
    viewer = make_user(db, "viewer")
    outsider = make_user(db, "outsider")
    add_member(db, manager, project, "manager")
    add_member(db, viewer, project, "viewer")
    wp = make_work_package(db, project, task, start_date=dt.date(2026, 1, 5), due_date=dt.date(2026, 1, 9),
                           author_id=manager.id)
    return {
        "project": project, "task": task, "milestone": milestone, "wp": wp,
        "admin": admin, "manager": manager, "viewer": viewer, "outsider": outsider,
    }
