import contextlib
from contextlib import asynccontextmanager
import asyncio
import logging
from pathlib import Path

from app.core.config import settings
from app.services.resume_service import purge_stale_uploads
from app.storage.resume_store import get_resume_store

logger = logging.getLogger(__name__)

_PURGE_INTERVAL_S = 3600


@asynccontextmanager
async def lifespan(app):
    get_resume_store()
    Path(settings.upload_tmp_dir).mkdir(parents=True, exist_ok=True)
    purge_stale_uploads(settings.upload_tmp_dir)

    stop_event = asyncio.Event()

    async def periodic_purge() -> None:
        while not stop_event.is_set():
            try:
                removed = purge_stale_uploads(settings.upload_tmp_dir)
                if removed:
                    logger.info("stale_upload_purge removed=%s", removed)
            except OSError as exc:
                logger.warning("stale_upload_purge_failed: %s", exc)
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=_PURGE_INTERVAL_S)
            except asyncio.TimeoutError:
                continue

    purge_task = asyncio.create_task(periodic_purge())
    yield
    stop_event.set()
    if not purge_task.done():
        purge_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await purge_task
