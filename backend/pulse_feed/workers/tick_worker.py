from __future__ import annotations
import asyncio
import logging
from pulse_feed.config import get_settings
from pulse_feed.services.feed_store import FeedStore, feed_store

logger = logging.getLogger(__name__)


async def run_tick_worker(store: FeedStore = feed_store):
    """Background worker advancing the live feed one tick per interval.

    A failed tick is logged and skipped; the previous snapshot stays in place.
    """
    settings = get_settings()
    logger.info(f"Tick worker started ({settings.tick_interval_seconds}s interval)")

    while True:
        try:
            tick = await store.tick()
            if tick % 100 == 0:
                logger.info(f"Feed at tick {tick}")
        except asyncio.CancelledError:
            logger.info("Tick worker cancelled")
            break
        except Exception as e:
            logger.error(f"Tick worker error: {e}")

        await asyncio.sleep(settings.tick_interval_seconds)
