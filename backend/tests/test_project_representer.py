import datetime as dt
import itertools
import json

import pytest

from projectboard.api.v3 import paths
from projectboard.core.cache import InMemoryCache
from projectboard.core.i18n import with_locale
from projectboard.db.models import Project
from projectboard.representers.project import ProjectRepresenter

from conftest import StubUserContext

UTC = dt.timezone.utc
GATED = ["add_work_packages", "view_work_packages", "manage_types"]


@pytest.fixture
def project():
    return Project(
        id=5,
        identifier="demo",
        name="Demo",
        description="Demo project",
        created_at=dt.datetime(2026, 3, 1, 8, 30, 0, tzinfo=UTC),
        updated_at=dt.datetime(2026, 3, 2, 9, 45, 12, 123456, tzinfo=UTC),
    )


def render(project, permissions=(), cache=None):
    return ProjectRepresenter(project, StubUserContext(permissions), cache).to_dict()


def test_scalar_properties(project):
    doc = render(project)
    assert doc["_type"] == "Project"
    assert doc["id"] == 5
    assert doc["identifier"] == "demo"
    assert doc["name"] == "Demo"
    assert doc["description"] == "Demo project"
    assert doc["createdAt"] == "2026-03-01T08:30:00Z"
    assert doc["updatedAt"] == "2026-03-02T09:45:12Z"


def test_naive_timestamps_are_rendered_as_utc(project):
    project.created_at = dt.datetime(2026, 3, 1, 8, 30, 0)
    assert render(project)["createdAt"] == "2026-03-01T08:30:00Z"


def test_timestamps_are_converted_to_utc(project):
    project.created_at = dt.datetime(2026, 3, 1, 10, 30, 0, tzinfo=dt.timezone(dt.timedelta(hours=2)))
    assert render(project)["createdAt"] == "2026-03-01T08:30:00Z"


def test_unconditional_links(project):
    links = render(project)["_links"]
    assert links["self"] == {"href": "/api/v3/projects/5", "title": "Demo"}
    assert links["categories"]["href"] == paths.categories_by_project(5)
    assert links["versions"]["href"] == paths.versions_by_project(5)


def test_create_links_with_add_work_packages(project):
    links = render(project, ["add_work_packages"])["_links"]
    assert links["createWorkPackage"]["href"] == paths.create_project_work_package_form(5)
    assert links["createWorkPackage"]["method"] == "post"
    assert links["createWorkPackageImmediate"]["href"] == paths.work_packages_by_project(5)


def test_no_create_links_without_add_work_packages(project):
    links = render(project, [])["_links"]
    assert "createWorkPackage" not in links
    assert "createWorkPackageImmediate" not in links


def test_view_work_packages_links_types_and_work_packages(project):
    links = render(project, ["view_work_packages"])["_links"]
    assert links["types"]["href"] == "/api/v3/projects/5/types"
    assert links["workPackages"]["href"] == "/api/v3/projects/5/work_packages"
    assert "createWorkPackage" not in links


def test_manage_types_links_types(project):
    links = render(project, ["manage_types"])["_links"]
    assert links["types"]["href"] == paths.types_by_project(5)
    assert links["workPackages"]["href"] == paths.work_packages_by_project(5)


def test_no_types_or_work_packages_without_permissions(project):
    links = render(project, [])["_links"]
    assert "types" not in links
    assert "workPackages" not in links


@pytest.mark.parametrize(
    "permissions",
    [set(c) for n in range(len(GATED) + 1) for c in itertools.combinations(GATED, n)],
)
def test_gated_links_follow_permissions(project, permissions):
    links = render(project, permissions, cache=InMemoryCache())["_links"]
    assert ("createWorkPackage" in links) == ("add_work_packages" in permissions)
    assert ("createWorkPackageImmediate" in links) == ("add_work_packages" in permissions)
    assert ("types" in links) == bool({"view_work_packages", "manage_types"} & permissions)
    assert ("workPackages" in links) == bool({"view_work_packages", "manage_types"} & permissions)


def test_gated_links_are_not_shared_through_the_cache(project):
    cache = InMemoryCache()
    granted = render(project, ["add_work_packages", "view_work_packages"], cache)
    denied = render(project, [], cache)
    assert "createWorkPackage" in granted["_links"]
    assert "createWorkPackage" not in denied["_links"]
    assert "types" not in denied["_links"]
    assert len(cache.items) == 1


def test_to_json_is_read_through_the_cache(project):
    cache = InMemoryCache()
    representer = ProjectRepresenter(project, StubUserContext(), cache)
    first = json.loads(representer.to_json())
    assert representer.json_cache_key in cache.items

    project.name = "Renamed without touching updated_at"
    second = json.loads(representer.to_json())
    assert second["name"] == first["name"] == "Demo"


def test_cache_key_includes_representer_class(project):
    key = ProjectRepresenter(project, StubUserContext()).json_cache_key
    for part in ("projectboard", "representers", "project", "ProjectRepresenter"):
        assert part in key.split("/")


def test_cache_key_changes_with_locale(project):
    representer = ProjectRepresenter(project, StubUserContext())
    former = representer.json_cache_key
    with with_locale("fr"):
        assert representer.json_cache_key != former
    assert representer.json_cache_key == former


def test_locale_change_forces_recomputation(project):
    cache = InMemoryCache()
    english = render(project, cache=cache)
    with with_locale("de"):
        german = render(project, cache=cache)
    assert english["_links"]["categories"]["title"] == "Categories"
    assert german["_links"]["categories"]["title"] == "Kategorien"
    assert len(cache.items) == 2


def test_cache_key_changes_when_project_is_updated(project):
    representer = ProjectRepresenter(project, StubUserContext())
    former = representer.json_cache_key
    project.updated_at = project.updated_at + dt.timedelta(seconds=20)
    assert representer.json_cache_key != former


def test_update_invalidates_cached_representation(project):
    cache = InMemoryCache()
    render(project, cache=cache)
    project.name = "Renamed"
    project.updated_at = project.updated_at + dt.timedelta(seconds=20)
    assert render(project, cache=cache)["name"] == "Renamed"


def test_checked_permissions():
    assert ProjectRepresenter.checked_permissions == ["add_work_packages"]


def test_view_only_user_sees_types_but_cannot_create(project):
    links = render(project, {"view_work_packages"})["_links"]
    assert "href" in links["types"]
    assert "createWorkPackage" not in links
