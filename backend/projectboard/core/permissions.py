"""
Project permissions.

Project roles map to permission sets; global admins are allowed everything.
``UserContext`` is the per-request permission predicate consulted by the
representers and routers. Denied checks simply return False.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from sqlalchemy.orm import Session

from projectboard.db.models.member import Member, ProjectRole
from projectboard.db.models.project import Project
from projectboard.db.models.user import Role, User


class Permission(str, Enum):
    view_project = "view_project"
    edit_project = "edit_project"
    view_work_packages = "view_work_packages"
    add_work_packages = "add_work_packages"
    edit_work_packages = "edit_work_packages"
    manage_types = "manage_types"
    manage_categories = "manage_categories"
    manage_versions = "manage_versions"


ROLE_PERMISSIONS: dict[str, frozenset[str]] = {
    ProjectRole.manager.value: frozenset(p.value for p in Permission),
    ProjectRole.member.value: frozenset({
        Permission.view_project.value,
        Permission.view_work_packages.value,
        Permission.add_work_packages.value,
        Permission.edit_work_packages.value,
    }),
    ProjectRole.reporter.value: frozenset({
        Permission.view_project.value,
        Permission.view_work_packages.value,
        Permission.add_work_packages.value,
    }),
    ProjectRole.viewer.value: frozenset({
        Permission.view_project.value,
        Permission.view_work_packages.value,
    }),
}


def _name(permission: Permission | str) -> str:
    return permission.value if isinstance(permission, Permission) else str(permission)


class UserContext:
    """Permission predicate for the current user, memoised per (permission, project)."""

    def __init__(self, user: User | None, db: Session | None = None):
        self.user = user
        self.db = db
        self._roles: dict[int, str | None] = {}

    @property
    def is_admin(self) -> bool:
        return bool(self.user and self.user.is_active and self.user.role == Role.admin.value)

    def allowed_to(self, permission: Permission | str, project: Project | None) -> bool:
        if self.user is None or project is None or not self.user.is_active:
            return False
        if self.is_admin:
            return True
        role = self._role_in(project.id)
        if role is None:
            return False
        return _name(permission) in ROLE_PERMISSIONS.get(role, frozenset())

    def allowed_to_any(self, permissions: Iterable[Permission | str], project: Project | None) -> bool:
        return any(self.allowed_to(p, project) for p in permissions)

    def preload(self, projects: Iterable[Project]) -> None:
        """Load the memberships for ``projects`` in a single query."""
        ids = [p.id for p in projects if p.id not in self._roles]
        if not ids or self.user is None or self.db is None:
            return
        rows = (
            self.db.query(Member.project_id, Member.role)
            .filter(Member.user_id == self.user.id, Member.project_id.in_(ids))
            .all()
        )
        found = {project_id: role for project_id, role in rows}
        for project_id in ids:
            self._roles[project_id] = found.get(project_id)

    def _role_in(self, project_id: int) -> str | None:
        if project_id not in self._roles:
            if self.db is None:
                self._roles[project_id] = None
            else:
                m = (
                    self.db.query(Member)
                    .filter(Member.user_id == self.user.id, Member.project_id == project_id)
                    .one_or_none()
                )
                self._roles[project_id] = m.role if m else None
        return self._roles[project_id]
