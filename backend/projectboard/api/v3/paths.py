"""Hrefs of the v3 API resources."""

ROOT = "/api/v3"


def root() -> str:
    return ROOT


def projects() -> str:
    return f"{ROOT}/projects"


def project(project_id: int) -> str:
    return f"{ROOT}/projects/{project_id}"


def categories_by_project(project_id: int) -> str:
    return f"{project(project_id)}/categories"


def versions_by_project(project_id: int) -> str:
    return f"{project(project_id)}/versions"


def types_by_project(project_id: int) -> str:
    return f"{project(project_id)}/types"


def work_packages_by_project(project_id: int) -> str:
    return f"{project(project_id)}/work_packages"


def create_project_work_package_form(project_id: int) -> str:
    return f"{work_packages_by_project(project_id)}/form"


def work_package(work_package_id: int) -> str:
    return f"{ROOT}/work_packages/{work_package_id}"


def work_package_form(work_package_id: int) -> str:
    return f"{work_package(work_package_id)}/form"


def work_package_schema(project_id: int, type_id: int) -> str:
    return f"{ROOT}/work_packages/schemas/{project_id}-{type_id}"


def attachments_by_work_package(work_package_id: int) -> str:
    return f"{work_package(work_package_id)}/attachments"


def attachment(attachment_id: int) -> str:
    return f"{ROOT}/attachments/{attachment_id}"


def type(type_id: int) -> str:
    return f"{ROOT}/types/{type_id}"


def category(category_id: int) -> str:
    return f"{ROOT}/categories/{category_id}"


def version(version_id: int) -> str:
    return f"{ROOT}/versions/{version_id}"


def user(user_id: int) -> str:
    return f"{ROOT}/users/{user_id}"


def query(query_id: int | str) -> str:
    return f"{ROOT}/queries/{query_id}"


def parse_schema_id(schema_id: str) -> tuple[int, int]:
    """Split a ``{project_id}-{type_id}`` schema id; raises ValueError when malformed."""
    project_part, _, type_part = schema_id.partition("-")
    return int(project_part), int(type_part)
