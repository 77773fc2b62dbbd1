from sqlalchemy import event

from projectboard.core.permissions import ROLE_PERMISSIONS, Permission, UserContext

from conftest import add_member, make_project, make_user


def test_admin_is_allowed_everything(db, world):
    ctx = UserContext(world["admin"], db)
    assert all(ctx.allowed_to(p, world["project"]) for p in Permission)


def test_member_permissions_follow_role(db, world):
    viewer = UserContext(world["viewer"], db)
    assert viewer.allowed_to(Permission.view_work_packages, world["project"])
    assert not viewer.allowed_to(Permission.add_work_packages, world["project"])

    manager = UserContext(world["manager"], db)
    assert manager.allowed_to("add_work_packages", world["project"])
    assert manager.allowed_to(Permission.manage_types, world["project"])


def test_non_member_is_denied(db, world):
    ctx = UserContext(world["outsider"], db)
    assert not ctx.allowed_to(Permission.view_project, world["project"])


def test_anonymous_and_inactive_are_denied(db, world):
    assert not UserContext(None, db).allowed_to(Permission.view_project, world["project"])
    world["manager"].is_active = False
    db.commit()
    assert not UserContext(world["manager"], db).allowed_to(Permission.view_project, world["project"])


def test_allowed_to_any(db, world):
    ctx = UserContext(world["viewer"], db)
    assert ctx.allowed_to_any([Permission.manage_types, Permission.view_work_packages], world["project"])
    assert not ctx.allowed_to_any([Permission.manage_types, Permission.edit_project], world["project"])


def test_reporter_can_add_but_not_edit():
    assert "add_work_packages" in ROLE_PERMISSIONS["reporter"]
    assert "edit_work_packages" not in ROLE_PERMISSIONS["reporter"]


def test_preload_loads_memberships_in_one_query(db, engine, world):
    other = make_project(db, "other", "Other")
    third = make_project(db, "third", "Third")
    add_member(db, world["viewer"], other, "reporter")
    ctx = UserContext(world["viewer"], db)

    statements = []
    listener = lambda *args: statements.append(args[2])
    event.listen(engine, "before_cursor_execute", listener)
    try:
        ctx.preload([world["project"], other, third])
        assert ctx.allowed_to(Permission.view_work_packages, world["project"])
        assert ctx.allowed_to(Permission.add_work_packages, other)
        assert not ctx.allowed_to(Permission.view_project, third)
    finally:
        event.remove(engine, "before_cursor_execute", listener)
    assert len(statements) == 1


def test_checks_are_memoised(db, engine, world):
    ctx = UserContext(world["viewer"], db)
    ctx.allowed_to(Permission.view_project, world["project"])

    statements = []
    listener = lambda *args: statements.append(args[2])
    event.listen(engine, "before_cursor_execute", listener)
    try:
        ctx.allowed_to(Permission.view_work_packages, world["project"])
        ctx.allowed_to(Permission.add_work_packages, world["project"])
    finally:
        event.remove(engine, "before_cursor_execute", listener)
    assert statements == []
