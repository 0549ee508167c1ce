import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import structlog
import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from src.app_state import AppState
from src.config import Settings
from src.reviews.config_pusher import HttpConfigPusher
from src.reviews.fetcher import HttpReviewFetcher
from src.reviews.render import render_page
from src.reviews.scheduler import PollScheduler
from src.reviews.session import ReviewSession
from src.reviews.state import ViewState
from src.routers.reviews import get_app_state
from src.routers.reviews import router as reviews_router

settings = Settings()

logging.basicConfig(level=settings.log_level.upper())
logger = structlog.get_logger(__name__)


def build_session(cfg: Settings) -> ReviewSession:
    state = ViewState(
        app_id=cfg.default_app_id,
        time_window=cfg.default_time_window,
        sort_mode=cfg.default_sort_mode,
        poll_interval=cfg.default_poll_interval,
        result_limit=cfg.result_limit,
    )
    fetcher = HttpReviewFetcher(cfg.backend_url, cfg.api_base, timeout=cfg.request_timeout)
    pusher = HttpConfigPusher(cfg.backend_url, cfg.api_base, timeout=cfg.request_timeout)
    scheduler = PollScheduler(state, fetcher, cfg.refresh_interval)
    return ReviewSession(state, scheduler, pusher)


@asynccontextmanager
async def lifespan(app: FastAPI):
    session = build_session(settings)
    app.state.app_state = AppState(session=session)
    app.state.settings = settings
    session.scheduler.start()
    logger.info(
        "session_started",
        backend_url=settings.backend_url,
        api_base=settings.api_base,
        app_id=settings.default_app_id,
    )
    yield
    await session.scheduler.stop()
    logger.info("session_stopped")


app = FastAPI(title="Review Feed Client", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(reviews_router)


@app.get("/", response_class=HTMLResponse)
async def index(state: AppState = Depends(get_app_state)):
    return render_page(state.session.view())


@app.get("/health")
async def health():
    return {"status": "healthy", "time": datetime.now(tz=timezone.utc).isoformat()}


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)
