import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from src.app_state import AppState
from src.models import (
    ConfigureResponse,
    PollIntervalRequest,
    SelectionRequest,
    SortRequest,
    ViewResponse,
)
from src.reviews.state import ViewSnapshot

router = APIRouter(prefix="/api/v1")

logger = structlog.get_logger(__name__)


def get_app_state(request: Request) -> AppState:
    return request.app.state.app_state


def to_view_response(snapshot: ViewSnapshot) -> ViewResponse:
    return ViewResponse(
        app_id=snapshot.app_id,
        time_window=snapshot.time_window,
        sort_mode=snapshot.sort_mode,
        poll_interval=snapshot.poll_interval,
        loading=snapshot.loading,
        error=snapshot.error,
        count=snapshot.count,
        reviews=snapshot.reviews,
        last_updated=snapshot.last_updated,
    )


@router.get("/view")
async def get_view(state: AppState = Depends(get_app_state)) -> ViewResponse:
    return to_view_response(state.session.view())


@router.put("/selection")
async def put_selection(
    body: SelectionRequest,
    state: AppState = Depends(get_app_state),
) -> ViewResponse:
    try:
        changed = state.session.select(app_id=body.app_id, time_window=body.time_window)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if changed:
        logger.info("selection_updated", app_id=body.app_id, time_window=body.time_window)
    return to_view_response(state.session.view())


@router.put("/sort")
async def put_sort(
    body: SortRequest,
    state: AppState = Depends(get_app_state),
) -> ViewResponse:
    state.session.set_sort_mode(body.sort_mode)
    return to_view_response(state.session.view())


@router.put("/poll-interval")
async def put_poll_interval(
    body: PollIntervalRequest,
    state: AppState = Depends(get_app_state),
) -> ViewResponse:
    try:
        state.session.set_poll_interval(body.poll_interval)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return to_view_response(state.session.view())


@router.post("/refresh", status_code=202)
async def post_refresh(state: AppState = Depends(get_app_state)):
    state.session.refresh()
    return {"status": "refreshing"}


@router.post("/configure")
async def post_configure(state: AppState = Depends(get_app_state)):
    notice = await state.session.configure()
    body = ConfigureResponse(ok=notice.ok, message=notice.message)
    return JSONResponse(
        content=body.model_dump(),
        status_code=200 if notice.ok else 502,
    )


@router.get("/polling/status")
async def get_polling_status(state: AppState = Depends(get_app_state)):
    return {"polling_status": state.session.polling_status()}
