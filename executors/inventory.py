from executors.base import PersistingExecutor
from models.requests import InventoryRequest


class InventoryExecutor(PersistingExecutor):
    """
    Saves inventory items into the `items` table.
    """

    model_name = "item"

    def redirect(self, request: InventoryRequest, record_id: str) -> str:
        if request.project_id:
            return f"/projects/{request.project_id}/inventory"
        return f"/inventory/{record_id}"
