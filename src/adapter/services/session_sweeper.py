import asyncio
import logging
from typing import Optional

from src.adapter.services.database import Database
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.admin import SweepExpiredSessionsUseCase

logger = logging.getLogger(__name__)


class SessionSweepScheduler:
    """Background task that periodically deletes expired sessions."""

    def __init__(self, database: Database, interval_minutes: int, enabled: bool = True):
        self.database = database
        self.interval_seconds = max(interval_minutes, 1) * 60
        self.enabled = enabled
        self._task: Optional[asyncio.Task] = None
        self._stop_event = asyncio.Event()

    async def start(self) -> None:
        if not self.enabled:
            logger.info("Expired session sweep disabled by configuration.")
            return
        if self._task and not self._task.done():
            return
        logger.info(
            "Sweeping expired sessions every %s minutes", self.interval_seconds / 60
        )
        self._stop_event.clear()
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if not self._task:
            return
        self._stop_event.set()
        await self._task
        self._task = None

    async def _run(self) -> None:
        while not self._stop_event.is_set():
            await self.sweep_once()
            try:
                await asyncio.wait_for(
                    self._stop_event.wait(), timeout=self.interval_seconds
                )
            except asyncio.TimeoutError:
                continue

    async def sweep_once(self) -> int:
        try:
            async with self.database.session_factory() as session:
                result = await SweepExpiredSessionsUseCase(
                    SqlAlchemyUnitOfWork(session)
                ).execute()
            return result.value.deleted_count
        except Exception:
            logger.exception("Expired session sweep failed")
            return 0
