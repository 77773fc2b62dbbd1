from projectboard.core.security import verify_password
from projectboard.crud.projects import list_projects
from projectboard.crud.types import list_types
from projectboard.crud.users import get_user_by_login
from projectboard.representers.schema import WorkPackageSchemaRepresenter
from projectboard.services.schema import QUERY_GROUP, WorkPackageSchema
from projectboard.services.seed import seed_demo

from conftest import StubUserContext


def test_seed_demo_is_idempotent(db):
    seed_demo(db)
    seed_demo(db)

    admin = get_user_by_login(db, "admin")
    assert admin.role == "Admin"
    assert verify_password("admin123", admin.password_hash)

    assert [ty.name for ty in list_types(db)] == ["Task", "Milestone", "Feature"]
    projects = list_projects(db)
    assert [p.identifier for p in projects] == ["demo"]
    assert [ty.name for ty in projects[0].types] == ["Task", "Milestone", "Feature"]
    assert [c.name for c in projects[0].categories] == ["Backend"]


def test_seeded_feature_schema_has_children_query(db):
    seed_demo(db)
    project = list_projects(db)[0]
    feature = next(ty for ty in project.types if ty.name == "Feature")

    doc = WorkPackageSchemaRepresenter(WorkPackageSchema(project, feature), StubUserContext()).to_dict()
    groups = doc["_attributeGroups"]
    assert [g["name"] for g in groups] == ["Details", "People", "Children"]
    assert groups[2]["_type"] == QUERY_GROUP
    assert groups[2]["relationType"] == "children"
    assert groups[2]["_embedded"]["query"]["_type"] == "Query"
