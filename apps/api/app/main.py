import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.routers import contacts

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Contacts API",
    version="0.1.0",
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Authorization", "Content-Type", "X-User-Id", "X-User-Role"],
)

app.include_router(contacts.router, prefix="/contacts", tags=["contacts"])


@app.on_event("startup")
async def _log_import_settings():
    logger.info(
        f"[Import] Batch size: {settings.IMPORT_BATCH_SIZE} | "
        f"Ignore token: {settings.IMPORT_IGNORE_TOKEN!r}"
    )


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}
