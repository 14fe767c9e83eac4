from executors.base import PersistingExecutor
from models.requests import TaskRequest


class TaskExecutor(PersistingExecutor):
    """
    Saves tasks. Project tasks land on the project's task board.
    """

    model_name = "task"

    def redirect(self, request: TaskRequest, record_id: str) -> str:
        if request.project_id:
            return f"/projects/{request.project_id}/tasks"
        return f"/tasks/{record_id}"
