from executors.base import BaseExecutor
from models.requests import BusinessPlanRequest
from services.utils import deep_serialize


class BusinessPlanExecutor(BaseExecutor):
    """
    Business-plan requests write nothing; they open the bound project
    with the spoken query attached.
    """

    async def execute(self, request: BusinessPlanRequest) -> dict:
        return {
            "type": request.kind.value,
            "data": deep_serialize(request.to_record()),
            "redirect": f"/projects/{request.project_id}",
        }
