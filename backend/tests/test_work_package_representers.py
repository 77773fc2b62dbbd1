import datetime as dt

from projectboard.core.cache import InMemoryCache
from projectboard.core.permissions import UserContext
from projectboard.db.models import Attachment
from projectboard.representers.base import CollectionRepresenter
from projectboard.representers.form import WorkPackageFormRepresenter
from projectboard.representers.project import ProjectRepresenter
from projectboard.representers.schema import WorkPackageSchemaRepresenter
from projectboard.representers.work_package import WorkPackageRepresenter
from projectboard.services.schema import WorkPackageSchema

from conftest import StubUserContext, make_project, make_type, make_work_package


def test_work_package_properties_and_links(db, world):
    wp = world["wp"]
    doc = WorkPackageRepresenter(wp, StubUserContext()).to_dict()
    assert doc["_type"] == "WorkPackage"
    assert doc["subject"] == "Write docs"
    assert doc["startDate"] == "2026-01-05"
    assert doc["dueDate"] == "2026-01-09"
    assert "date" not in doc
    links = doc["_links"]
    assert links["schema"]["href"] == f"/api/v3/work_packages/schemas/{wp.project_id}-{wp.type_id}"
    assert links["project"] == {"href": f"/api/v3/projects/{wp.project_id}", "title": "Demo"}
    assert links["category"] == {"href": None}
    assert "update" not in links
    assert "addAttachment" not in links


def test_milestone_exposes_single_date(db, world):
    wp = make_work_package(db, world["project"], world["milestone"], subject="Release",
                           start_date=dt.date(2026, 2, 1), due_date=dt.date(2026, 2, 1))
    doc = WorkPackageRepresenter(wp, StubUserContext()).to_dict()
    assert doc["date"] == "2026-02-01"
    assert "startDate" not in doc and "dueDate" not in doc


def test_edit_links_need_edit_permission(db, world):
    links = WorkPackageRepresenter(world["wp"], StubUserContext(["edit_work_packages"])).to_dict()["_links"]
    assert links["update"]["method"] == "post"
    assert links["updateImmediately"]["method"] == "patch"
    assert links["addAttachment"]["href"].endswith("/attachments")


def test_attachments_are_embedded(db, world):
    wp = world["wp"]
    db.add(Attachment(work_package_id=wp.id, file_name="spec.pdf", filesize=42))
    db.commit()
    db.refresh(wp)
    attachments = WorkPackageRepresenter(wp, StubUserContext()).to_dict()["_embedded"]["attachments"]
    assert attachments["total"] == 1
    assert attachments["_embedded"]["elements"][0]["fileName"] == "spec.pdf"


def test_schema_for_regular_type(db, world):
    doc = WorkPackageSchemaRepresenter(WorkPackageSchema(world["project"], world["task"]), StubUserContext()).to_dict()
    assert doc["_type"] == "Schema"
    assert "startDate" in doc and "dueDate" in doc
    assert "date" not in doc
    assert doc["subject"]["required"] is True
    assert doc["category"]["_links"]["allowedValues"]["href"].endswith("/categories")
    groups = doc["_attributeGroups"]
    assert [g["name"] for g in groups] == ["People", "Estimates and time", "Details", "Other"]
    assert all(g["_type"] == "WorkPackageFormAttributeGroup" for g in groups)
    assert "baseSchema" not in doc["_links"]


def test_schema_for_milestone_type(db, world):
    doc = WorkPackageSchemaRepresenter(WorkPackageSchema(world["project"], world["milestone"]), StubUserContext()).to_dict()
    assert "date" in doc
    assert "startDate" not in doc and "dueDate" not in doc


def test_schema_with_query_group(db):
    ty = make_type(db, "Feature", groups=[
        {"type": "attribute", "name": "Main", "attributes": ["subject"]},
        {"type": "query", "name": "Children", "relation_type": "children", "query": {"filters": []}},
    ])
    project = make_project(db, "feat", "Features", types=[ty])
    groups = WorkPackageSchemaRepresenter(WorkPackageSchema(project, ty), StubUserContext()).to_dict()["_attributeGroups"]
    assert groups[0] == {"_type": "WorkPackageFormAttributeGroup", "name": "Main", "attributes": ["subject"]}
    assert groups[1]["_type"] == "WorkPackageFormQueryGroup"
    assert groups[1]["relationType"] == "children"
    assert groups[1]["_embedded"]["query"]["_type"] == "Query"


def test_form_schema_links_base_schema(db, world):
    schema = WorkPackageSchema(world["project"], world["task"])
    form = WorkPackageFormRepresenter(schema, {"subject": "New"}, StubUserContext()).to_dict()
    embedded_schema = form["_embedded"]["schema"]
    assert embedded_schema["_links"]["baseSchema"]["href"] == f"/api/v3/work_packages/schemas/{schema.id}"
    assert embedded_schema["_links"]["self"]["href"].endswith("/work_packages/form")
    assert form["_embedded"]["payload"]["_links"]["type"]["title"] == "Task"
    assert "commit" in form["_links"]


def test_form_with_errors_cannot_be_committed(db, world):
    schema = WorkPackageSchema(world["project"], world["task"])
    form = WorkPackageFormRepresenter(schema, {}, StubUserContext(), errors={"subject": "blank"}).to_dict()
    assert form["_embedded"]["validationErrors"]["subject"]["message"] == "blank"
    assert "commit" not in form["_links"]


def test_schema_cache_key_changes_with_type_update(db, world):
    schema = WorkPackageSchema(world["project"], world["task"])
    former = WorkPackageSchemaRepresenter(schema, StubUserContext()).json_cache_key
    world["task"].updated_at = world["task"].updated_at + dt.timedelta(seconds=1)
    assert WorkPackageSchemaRepresenter(schema, StubUserContext()).json_cache_key != former


def test_work_package_cache_follows_linked_records(db, world):
    cache = InMemoryCache()
    wp = world["wp"]
    before = WorkPackageRepresenter(wp, StubUserContext(), cache).to_dict()
    assert before["_links"]["project"]["title"] == "Demo"

    world["project"].name = "Renamed"
    db.commit()
    after = WorkPackageRepresenter(wp, StubUserContext(), cache).to_dict()
    assert after["_links"]["project"]["title"] == "Renamed"

    world["task"].name = "Chore"
    db.commit()
    assert WorkPackageRepresenter(wp, StubUserContext(), cache).to_dict()["_links"]["type"]["title"] == "Chore"


def test_collection_preloads_checked_permissions(db, world):
    other = make_project(db, "other", "Other")
    ctx = UserContext(world["manager"], db)
    doc = CollectionRepresenter([world["project"], other], "/api/v3/projects", ctx,
                                ProjectRepresenter, InMemoryCache()).to_dict()
    assert set(ctx._roles) == {world["project"].id, other.id}
    assert doc["total"] == 2
    elements = doc["_embedded"]["elements"]
    assert "createWorkPackage" in elements[0]["_links"]
    assert "createWorkPackage" not in elements[1]["_links"]
