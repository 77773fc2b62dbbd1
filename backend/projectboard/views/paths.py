class PathHelper:
    """Application (HTML) paths, as opposed to the v3 API hrefs."""

    def __init__(self, base_path: str = ""):
        self.base_path = base_path.rstrip("/")

    def project_path(self, project_id: int | str) -> str:
        return f"{self.base_path}/projects/{project_id}"

    def project_work_package_path(self, project_id: int | str, work_package_id: int | str) -> str:
        return f"{self.project_path(project_id)}/work_packages/{work_package_id}"
