from executors.base import PersistingExecutor
from models.requests import ProjectRequest


class ProjectExecutor(PersistingExecutor):
    model_name = "project"

    def redirect(self, request: ProjectRequest, record_id: str) -> str:
        return f"/projects/{record_id}"
