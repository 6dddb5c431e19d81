"""Demo mode auto-reset.

When the ``is_demo_mode`` flag is set in AppSettings, the whole entity graph
is wiped and reseeded on a fixed interval. Wipe and reseed share one
transaction, so concurrent readers see either the old graph or the new one.
"""

import asyncio
import enum
from collections.abc import Awaitable, Callable
from contextlib import suppress

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.logging import get_logger
from ...database import Database
from ..records import crud
from ..records.models import (
    Appliance,
    Document,
    Expense,
    LeaseContract,
    Owner,
    PaymentSchedule,
    PayoutVoucher,
    Property,
    Reminder,
    Tenant,
    Transaction,
    Unit,
    User,
    Wallet,
)
from .seed import seed_if_needed

logger = get_logger(__name__)

Seeder = Callable[[AsyncSession], Awaitable[None]]

# Children before parents
RESET_ORDER = (
    Transaction,
    PaymentSchedule,
    Document,
    Expense,
    Reminder,
    PayoutVoucher,
    LeaseContract,
    Appliance,
    Unit,
    Property,
    Tenant,
    Owner,
    Wallet,
    User,
)


class ResetState(str, enum.Enum):
    IDLE = "idle"
    RESETTING = "resetting"


async def wipe_graph(db: AsyncSession) -> None:
    """Delete every entity row in dependency order. AppSettings survives."""
    for model in RESET_ORDER:
        await db.execute(delete(model))


class DemoResetScheduler:
    """Periodically resets the store while demo mode is on.

    Args:
        database: Store handle
        interval_seconds: Delay between ticks
        seeder: Rebuilds the demo graph inside the reset transaction
    """

    def __init__(
        self,
        database: Database,
        interval_seconds: float,
        seeder: Seeder = seed_if_needed,
    ):
        self.database = database
        self.interval_seconds = interval_seconds
        self.seeder = seeder
        self.state = ResetState.IDLE
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="demo-reset")
        logger.info(f"Demo reset scheduled every {self.interval_seconds:.0f}s")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            await self.tick()

    async def demo_mode_enabled(self) -> bool:
        async with self.database.session() as db:
            app_settings = await crud.get_settings(db)
        return bool(app_settings and app_settings.is_demo_mode)

    async def tick(self) -> bool:
        """Reset if demo mode is on. Never raises.

        Returns:
            True if a reset was committed
        """
        try:
            if not await self.demo_mode_enabled():
                return False
        except Exception:
            logger.exception("Could not read demo mode flag")
            return False

        return await self.reset()

    async def reset(self) -> bool:
        """Wipe and reseed the graph in one transaction. Never raises.

        Returns:
            True if the reset was committed, False if it was rolled back
        """
        self.state = ResetState.RESETTING
        logger.info("Resetting database (demo mode)")
        try:
            async with self.database.transaction() as db:
                await wipe_graph(db)
                logger.info("Database cleared. Reseeding...")
                await self.seeder(db)
            logger.info("Database restored to default")
            return True
        except Exception:
            logger.exception("Demo reset failed")
            return False
        finally:
            self.state = ResetState.IDLE
