from __future__ import annotations
import asyncio
import logging
from contextlib import asynccontextmanager

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pulse_feed.config import get_settings
from pulse_feed.services.feed_store import feed_store
from pulse_feed.services.sampling import RandomSampler, set_sampler

settings = get_settings()

worker_tasks: list[asyncio.Task] = []


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    if settings.random_seed is not None:
        set_sampler(RandomSampler.seeded(settings.random_seed))
    feed_store.seed(settings.tokens_per_category)

    if settings.tick_enabled:
        from pulse_feed.workers.tick_worker import run_tick_worker
        worker_tasks.append(asyncio.create_task(run_tick_worker(feed_store)))

    yield

    # Shutdown
    for task in worker_tasks:
        task.cancel()
    await asyncio.gather(*worker_tasks, return_exceptions=True)
    worker_tasks.clear()


app = FastAPI(
    title="Token Pulse Feed",
    description="Synthetic live feed of memecoin pairs by lifecycle category",
    version="1.0.0",
    lifespan=lifespan,
)

_origins = [settings.frontend_url.rstrip("/"), "http://localhost:3000", "http://localhost:3001"]
if settings.extra_cors_origins:
    _origins.extend([o.strip().rstrip("/") for o in settings.extra_cors_origins.split(",") if o.strip()])
# Deduplicate
_origins = list(dict.fromkeys(_origins))

logger = logging.getLogger(__name__)
logger.info("CORS allowed origins: %s", _origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Register route modules
from pulse_feed.api import feed, tokens

app.include_router(tokens.router)
app.include_router(feed.router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "tick": feed_store.tick_count}
