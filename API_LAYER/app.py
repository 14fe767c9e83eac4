# app.py
import logging
import json
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, field_validator
from asyncio import Lock

from config import DATABASE_URL, DEBUG, LOG_LEVEL, PORT
from core.intent import AmbientContext, ProjectRef, VoiceCommand
from core.vocabulary import RequestKind
from executors.base import BaseExecutor
from executors.business_plan import BusinessPlanExecutor
from executors.inventory import InventoryExecutor
from executors.project import ProjectExecutor
from executors.task import TaskExecutor
from services.classifier import classify
from services.project_lookup import PrismaProjectLookup
from services.utils import deep_serialize


# -----------------------------
# Kind → Executor mapping (SINGLE SOURCE OF TRUTH)
# -----------------------------
PERSISTING_EXECUTORS = {
    RequestKind.TASK: TaskExecutor,
    RequestKind.INVENTORY: InventoryExecutor,
    RequestKind.PROJECT: ProjectExecutor,
}

# -----------------------------
# Structured Logging Setup
# -----------------------------
class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(
            {
                "time": self.formatTime(record, self.datefmt),
                "level": record.levelname,
                "name": record.name,
                "message": record.getMessage(),
                "exception": record.exc_text,
            }
        )


logger = logging.getLogger("voice_intake_api")
logger.setLevel(LOG_LEVEL)
handler = logging.StreamHandler()
handler.setFormatter(JSONFormatter())
if not logger.handlers:
    logger.addHandler(handler)

# -----------------------------
# FastAPI App
# -----------------------------
app = FastAPI(title="Voice Intake API", version="1.0")
app.state.db = None

DB_CONNECTED: bool = False
DB_ERROR: str | None = None

# -----------------------------
# Metrics
# -----------------------------
metrics_lock = Lock()
request_counters = {
    RequestKind.TASK.value: 0,
    RequestKind.INVENTORY.value: 0,
    RequestKind.PROJECT.value: 0,
    RequestKind.BUSINESS_PLAN.value: 0,
    "total": 0,
    "errors": 0,
}

# -----------------------------
# Pydantic Models
# -----------------------------
class VoiceRequest(BaseModel):
    text: str
    user_id: str
    project_id: Optional[str] = None
    project_title: Optional[str] = None

    @field_validator("text")
    @classmethod
    def text_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Transcript is empty")
        return v.strip()

    def to_command(self) -> VoiceCommand:
        project = None
        if self.project_id:
            project = ProjectRef(id=self.project_id, title=self.project_title or "")
        return VoiceCommand(
            raw_input=self.text,
            context=AmbientContext(user_id=self.user_id, project=project),
        )

# -----------------------------
# Failure envelope
# -----------------------------
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "type": "http_error",
                "code": exc.status_code,
                "message": str(exc.detail),
            }
        },
    )

# -----------------------------
# Startup / Shutdown Events
# -----------------------------
@app.on_event("startup")
async def startup():
    global DB_CONNECTED, DB_ERROR

    if not DATABASE_URL:
        logger.warning("DATABASE_URL not set; running classify-only.")
        DB_CONNECTED = False
        DB_ERROR = "DATABASE_URL not set"
        return

    try:
        # Generated client; only importable after `prisma generate`
        from prisma import Prisma

        db = Prisma()
        await db.connect()
        app.state.db = db
        DB_CONNECTED = True
        DB_ERROR = None
        logger.info("✅ Prisma DB connected")

    except Exception as e:
        DB_CONNECTED = False
        DB_ERROR = str(e)
        logger.exception("❌ Failed to connect Prisma DB")
        if DEBUG:
            raise


@app.on_event("shutdown")
async def shutdown():
    global DB_CONNECTED
    if DB_CONNECTED:
        await app.state.db.disconnect()
        DB_CONNECTED = False
        logger.info("✅ Prisma DB disconnected")


def get_executor(kind: RequestKind) -> BaseExecutor:
    if not kind.is_persisted():
        return BusinessPlanExecutor()

    db = app.state.db
    if db is None:
        raise HTTPException(status_code=503, detail=f"Cannot save {kind.value}: database unavailable")
    return PERSISTING_EXECUTORS[kind](db)

# -----------------------------
# API Endpoints
# -----------------------------
@app.get("/")
async def root():
    return {"message": "Voice Intake API is running."}


@app.get("/health")
async def health() -> Dict[str, Any]:
    info = {"status": "ok", "db_connected": DB_CONNECTED}
    if DB_ERROR:
        info["db_error"] = DB_ERROR
    return info


@app.get("/metrics")
async def metrics() -> Dict[str, Any]:
    async with metrics_lock:
        return request_counters.copy()


@app.post("/voice")
async def process_voice(request: VoiceRequest):
    async with metrics_lock:
        request_counters["total"] += 1

    try:
        logger.info(
            f"[REQUEST_START] user_id={request.user_id}, text_length={len(request.text)}, "
            f"project_id={request.project_id}"
        )

        command = request.to_command()

        # -----------------
        # Classification
        # -----------------
        db = app.state.db
        lookup = PrismaProjectLookup(db) if db is not None else None
        creation_request = await classify(command.raw_input, command.context, lookup=lookup)

        logger.info(
            f"[INTENT] user_id={request.user_id}, kind={creation_request.kind.value}, "
            f"text='{command.raw_input[:100]}...'"
        )

        # -----------------
        # Execution
        # -----------------
        response = await get_executor(creation_request.kind).execute(creation_request)
        response["request"] = deep_serialize(creation_request)

        async with metrics_lock:
            request_counters[creation_request.kind.value] += 1
        return response

    except HTTPException:
        async with metrics_lock:
            request_counters["errors"] += 1
        raise

    except Exception as e:
        async with metrics_lock:
            request_counters["errors"] += 1

        logger.exception(
            f"[ERROR] user_id={request.user_id}, exception={e}"
        )

        raise HTTPException(
            status_code=500,
            detail=str(e) if DEBUG else "An unexpected error occurred",
        )


# -----------------------------
# Entrypoint
# -----------------------------
import uvicorn

if __name__ == "__main__":
    uvicorn.run("API_LAYER.app:app", host="0.0.0.0", port=PORT, workers=1)
