from projectboard.api.v3 import paths
from projectboard.representers.schema import WorkPackageSchemaRepresenter
from projectboard.services.schema import WorkPackageSchema


class WorkPackageFormRepresenter:
    """Form for a new work package: the payload so far, its schema and validation errors.

    Forms reflect unsaved input and are never cached.
    """

    def __init__(self, schema: WorkPackageSchema, payload: dict, current_user,
                 errors: dict[str, str] | None = None):
        self.schema = schema
        self.payload = payload
        self.current_user = current_user
        self.errors = errors or {}

    def to_dict(self) -> dict:
        project_id = self.schema.project.id
        payload = dict(self.payload)
        payload["_links"] = {
            "project": {"href": paths.project(project_id), "title": self.schema.project.name},
            "type": {"href": paths.type(self.schema.type.id), "title": self.schema.type.name},
        }
        schema = WorkPackageSchemaRepresenter(self.schema, self.current_user, form=True).to_dict()
        links = {
            "self": {"href": paths.create_project_work_package_form(project_id), "method": "post"},
            "validate": {"href": paths.create_project_work_package_form(project_id), "method": "post"},
        }
        if not self.errors:
            links["commit"] = {"href": paths.work_packages_by_project(project_id), "method": "post"}
        return {
            "_type": "Form",
            "_embedded": {
                "payload": payload,
                "schema": schema,
                "validationErrors": {
                    name: {"_type": "Error", "message": message} for name, message in self.errors.items()
                },
            },
            "_links": links,
        }
