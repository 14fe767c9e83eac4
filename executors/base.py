import logging
from abc import ABC, abstractmethod
from asyncio import wait_for, TimeoutError
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Dict

from fastapi import HTTPException

from config import PERSIST_TIMEOUT
from services.utils import deep_serialize

logger = logging.getLogger("voice_executors")
logger.setLevel(logging.INFO)


class BaseExecutor(ABC):
    """
    Base contract for all executors.
    Executors take a Creation Request and return a response dict.
    No classification, no parsing here.
    """

    @abstractmethod
    async def execute(self, request) -> dict:
        pass


def to_prisma_data(record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Prisma DateTime columns want datetimes; enums go in as their values.
    Unset fields are left out so column defaults apply.
    """
    data: Dict[str, Any] = {}
    for key, value in record.items():
        if value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, date) and not isinstance(value, datetime):
            value = datetime.combine(value, time.min, tzinfo=timezone.utc)
        data[key] = value
    return data


class PersistingExecutor(BaseExecutor):
    """
    Inserts the request into one table and reports where the UI should go next.
    Subclasses name the Prisma model and the redirect.
    """

    model_name: str

    def __init__(self, db, timeout: float = PERSIST_TIMEOUT):
        self.db = db
        self.timeout = timeout

    @abstractmethod
    def redirect(self, request, record_id: str) -> str:
        pass

    async def execute(self, request) -> dict:
        record = request.to_record()
        try:
            try:
                created = await wait_for(
                    getattr(self.db, self.model_name).create(data=to_prisma_data(record)),
                    timeout=self.timeout,
                )
            except TimeoutError:
                raise HTTPException(
                    status_code=504,
                    detail=f"Saving {request.kind.value} timed out",
                )

            record_id = str(created.id)
            logger.info(f"[PERSISTED] kind={request.kind.value}, id={record_id}")

            return {
                "type": request.kind.value,
                "data": deep_serialize({"id": record_id, **record}),
                "redirect": self.redirect(request, record_id),
            }

        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"Failed to save {request.kind.value}")
            raise HTTPException(
                status_code=500,
                detail=str(e),
            )
