"""Process-scoped services shared by request handlers and the scheduler."""

from .config import Settings
from .core.logging import get_logger
from .database import Database
from .modules.demo.scheduler import DemoResetScheduler
from .modules.demo.seed import seed_if_needed

logger = get_logger(__name__)


class AppServices:
    """Owns the store handle and the demo reset scheduler.

    Built once per process by the application lifespan and stored on
    ``app.state.services``.
    """

    def __init__(self, settings: Settings, database: Database | None = None):
        self.settings = settings
        self.database = database or Database.from_settings(settings)
        self.scheduler = DemoResetScheduler(
            self.database, interval_seconds=settings.reset_interval_seconds
        )

    async def start(self) -> None:
        """Create tables, seed, and start the scheduler when allowed."""
        await self.database.create_all()

        if self.settings.seed_on_startup:
            await self.seed()

        if self.settings.demo_reset_enabled:
            self.scheduler.start()
        else:
            logger.info("Demo reset scheduler disabled")

    async def seed(self) -> None:
        """Run the idempotent seed in its own transaction. Never raises."""
        try:
            async with self.database.transaction() as db:
                await seed_if_needed(db)
        except Exception:
            logger.exception("Error during seeding")

    async def stop(self) -> None:
        await self.scheduler.stop()
        await self.database.dispose()
