from __future__ import annotations

import logging
import os
import secrets
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Query, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from gardencore import (
    GardenError,
    HabitNotFound,
    InvalidInput,
    JsonCursorStore,
    archive_habit,
    build_notification,
    create_habit,
    delete_habit,
    get_content,
    get_garden,
    get_global_stats,
    get_habit_stats,
    get_streak_info,
    list_check_ins,
    list_milestones,
    load_garden,
    load_settings,
    locked_garden,
    now_local,
    record_check_in,
    update_habit,
    workspace_root as _workspace_root,
)
from gardencore.days import parse_day
from gardencore.hooks import run_hooks
from gardencore.store import user_habits

logging.basicConfig(
    level=os.environ.get("GARDEN_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(title="Buddy Garden", version="0.1.0")

security = HTTPBasic(auto_error=False)


# ── Auth ──────────────────────────────────────────────────────


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> int:
    """Resolve the owner id; the API is open as the default user without credentials set."""
    expected_username = os.environ.get("GARDEN_USERNAME", "")
    expected_password = os.environ.get("GARDEN_PASSWORD", "")
    default_user = load_settings(_workspace_root()).default_user_id

    if not expected_username or not expected_password:
        return default_user

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))

    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return default_user


# ── Error translation ─────────────────────────────────────────


def _http_error(e: GardenError) -> HTTPException:
    if isinstance(e, HabitNotFound):
        return HTTPException(status_code=404, detail="Habit not found")
    if isinstance(e, InvalidInput):
        return HTTPException(status_code=400, detail="; ".join(e.errors))
    logger.error("Unhandled garden error: %s", e)
    return HTTPException(status_code=500, detail=str(e))


def _parse_id(raw: Any, field: str = "habit_id") -> int:
    """Reject ids that are not positive integers before anything is computed."""
    if isinstance(raw, bool):
        raise HTTPException(status_code=400, detail=f"Invalid {field}")
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise HTTPException(status_code=400, detail=f"Invalid {field}")
    if value <= 0 or (isinstance(raw, float) and not raw.is_integer()):
        raise HTTPException(status_code=400, detail=f"Invalid {field}")
    return value


def _parse_day_param(raw: str | None, field: str) -> str | None:
    if raw is None:
        return None
    try:
        return parse_day(raw).isoformat()
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {field}: {raw}")


def _cursor_store() -> JsonCursorStore:
    return JsonCursorStore(_workspace_root())


# ── Health ────────────────────────────────────────────────────


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


# ── Habits ────────────────────────────────────────────────────


@app.get("/api/habits")
def api_list_habits(user_id: int = Depends(get_current_user)) -> list[dict[str, Any]]:
    data = load_garden(_workspace_root())
    return [h.to_dict() for h in user_habits(data, user_id)]


@app.post("/api/habits", status_code=201)
def api_create_habit(payload: dict[str, Any] = Body(...), user_id: int = Depends(get_current_user)) -> dict[str, Any]:
    root = _workspace_root()
    settings = load_settings(root)
    now_iso = now_local(root).isoformat(timespec="seconds")
    try:
        with locked_garden(root) as data:
            habit = create_habit(data, user_id, payload, now_iso, settings.max_active_habits)
    except GardenError as e:
        raise _http_error(e)
    logger.info("Created habit %s for user %s", habit.id, user_id)
    run_hooks("on_habit_created", {"habit": habit.to_dict()}, root)
    return habit.to_dict()


@app.patch("/api/habits/{habit_id}")
def api_update_habit(
    habit_id: str,
    payload: dict[str, Any] = Body(...),
    user_id: int = Depends(get_current_user),
) -> dict[str, Any]:
    hid = _parse_id(habit_id)
    root = _workspace_root()
    now_iso = now_local(root).isoformat(timespec="seconds")
    try:
        with locked_garden(root) as data:
            habit = update_habit(data, hid, user_id, payload, now_iso)
    except GardenError as e:
        raise _http_error(e)
    return habit.to_dict()


@app.post("/api/habits/{habit_id}/archive")
def api_archive_habit(habit_id: str, user_id: int = Depends(get_current_user)) -> dict[str, Any]:
    hid = _parse_id(habit_id)
    root = _workspace_root()
    now_iso = now_local(root).isoformat(timespec="seconds")
    try:
        with locked_garden(root) as data:
            habit = archive_habit(data, hid, user_id, now_iso)
    except GardenError as e:
        raise _http_error(e)
    run_hooks("on_habit_archived", {"habit": habit.to_dict()}, root)
    return habit.to_dict()


@app.delete("/api/habits/{habit_id}")
def api_delete_habit(habit_id: str, user_id: int = Depends(get_current_user)) -> dict[str, Any]:
    hid = _parse_id(habit_id)
    root = _workspace_root()
    try:
        with locked_garden(root) as data:
            habit = delete_habit(data, hid, user_id)
    except GardenError as e:
        raise _http_error(e)
    _cursor_store().forget(habit.id)
    logger.info("Deleted habit %s for user %s", habit.id, user_id)
    run_hooks("on_habit_deleted", {"habit": habit.to_dict()}, root)
    return {"success": True}


# ── Check-ins ─────────────────────────────────────────────────


@app.get("/api/checkins")
def api_list_check_ins(
    habit_id: str | None = None,
    from_: str | None = Query(default=None, alias="from"),
    to: str | None = None,
    user_id: int = Depends(get_current_user),
) -> list[dict[str, Any]]:
    hid = _parse_id(habit_id) if habit_id is not None else None
    start = _parse_day_param(from_, "from")
    end = _parse_day_param(to, "to")
    rows = list_check_ins(user_id, hid, start, end, _workspace_root())
    return [ci.to_dict() for ci in rows]


@app.post("/api/checkins")
def api_check_in(payload: dict[str, Any] = Body(...), user_id: int = Depends(get_current_user)) -> dict[str, Any]:
    if payload.get("habit_id") is None:
        raise HTTPException(status_code=400, detail="habit_id is required")
    hid = _parse_id(payload["habit_id"])
    try:
        return record_check_in(
            hid,
            user_id,
            completed=payload.get("completed"),
            value=payload.get("value"),
            root=_workspace_root(),
        )
    except GardenError as e:
        raise _http_error(e)


# ── Streaks, garden, stats ────────────────────────────────────


@app.get("/api/streaks/{habit_id}")
def api_streak(habit_id: str, user_id: int = Depends(get_current_user)) -> dict[str, Any]:
    hid = _parse_id(habit_id)
    try:
        return get_streak_info(hid, user_id, _workspace_root()).to_dict()
    except GardenError as e:
        raise _http_error(e)


@app.get("/api/garden")
def api_garden(user_id: int = Depends(get_current_user)) -> dict[str, Any]:
    return get_garden(user_id, _workspace_root()).to_dict()


@app.get("/api/analytics/{habit_id}")
def api_habit_stats(habit_id: str, user_id: int = Depends(get_current_user)) -> dict[str, Any]:
    hid = _parse_id(habit_id)
    try:
        return get_habit_stats(hid, user_id, _workspace_root()).to_dict()
    except GardenError as e:
        raise _http_error(e)


@app.get("/api/stats")
def api_global_stats(user_id: int = Depends(get_current_user)) -> dict[str, Any]:
    return get_global_stats(user_id, _workspace_root())


@app.get("/api/milestones/{habit_id}")
def api_milestones(habit_id: str, user_id: int = Depends(get_current_user)) -> list[dict[str, Any]]:
    hid = _parse_id(habit_id)
    try:
        return [m.to_dict() for m in list_milestones(hid, user_id, _workspace_root())]
    except GardenError as e:
        raise _http_error(e)


# ── Content ───────────────────────────────────────────────────


@app.get("/api/content/message")
def api_content_message(
    habit_id: str | None = None,
    type: str = "encouragement",
    trigger: str | None = None,
    context: str | None = None,
    just_checked_in: bool = False,
    was_broken: bool = False,
    user_id: int = Depends(get_current_user),
) -> dict[str, Any]:
    if habit_id is None:
        raise HTTPException(status_code=400, detail="habit_id is required")
    hid = _parse_id(habit_id)
    try:
        message = get_content(
            hid,
            user_id,
            type,
            _cursor_store(),
            trigger=trigger,
            context=context,
            just_checked_in=just_checked_in,
            was_broken=was_broken,
            root=_workspace_root(),
        )
    except GardenError as e:
        raise _http_error(e)
    return message.to_dict()


@app.post("/api/notifications/preview")
def api_notification_preview(
    payload: dict[str, Any] = Body(default={}),
    user_id: int = Depends(get_current_user),
) -> dict[str, str]:
    """Render a notification template for an external delivery service."""
    kind = str(payload.get("kind", "reminder"))
    variables = payload.get("variables") or {}
    if not isinstance(variables, dict):
        raise HTTPException(status_code=400, detail="variables must be an object")
    return build_notification(kind, variables)
