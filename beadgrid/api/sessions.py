import logging
import re
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import Response

from ..core import pattern_edit
from ..core.autosave import open_autosaver
from ..core.counts import build_color_legend
from ..core.geometry import to_logical
from ..core.sessions import SessionRecord, store as session_store
from ..export import PatternImportError, export_filename, export_json, export_pdf, export_png, parse_pattern
from ..models.pattern import Pattern
from ..models.api_schemas import (
    ColorCount,
    ColorRequest,
    FitRequest,
    PatternUpdateRequest,
    PointerEvent,
    SessionCreateRequest,
    SessionState,
    ToolRequest,
    ZoomRequest,
)
from ..settings import AUTOSAVE_KEY, DEVICE_PIXEL_RATIO

logger = logging.getLogger(__name__)

router = APIRouter()

_UNSAFE_FILENAME = re.compile(r'[\\/:*?"<>|\r\n]+')


def _state(record: SessionRecord) -> SessionState:
    return SessionState(**record.to_dict(include_pattern=True))


def _run(session_id: str, action):
    result = session_store.run(session_id, action)
    if result is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return result


def _download_name(title: str, extension: str) -> str:
    return _UNSAFE_FILENAME.sub("_", export_filename(title, extension))


# =====================================================================
#   SESSIONS
# =====================================================================

@router.post("/sessions")
def create_session(request: Optional[SessionCreateRequest] = None) -> SessionState:
    request = request or SessionCreateRequest()
    session_id = str(uuid4())
    autosaver = open_autosaver(request.autosave_key or AUTOSAVE_KEY)
    pattern = None if request.restore else Pattern.default()
    record = session_store.create(
        session_id,
        pattern=pattern,
        autosaver=autosaver,
        device_pixel_ratio=request.device_pixel_ratio or DEVICE_PIXEL_RATIO,
    )
    pattern = record.controller.pattern
    logger.info("Created session %s (%dx%d %s)", session_id, pattern.width, pattern.height, pattern.stitch)
    return _state(record)


@router.get("/sessions/{session_id}")
def get_session(session_id: str) -> SessionState:
    return _run(session_id, _state)


@router.delete("/sessions/{session_id}")
def delete_session(session_id: str) -> dict:
    if not session_store.delete(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"deleted": session_id}


# =====================================================================
#   POINTER + SELECTION
# =====================================================================

@router.post("/sessions/{session_id}/pointer")
def pointer(session_id: str, event: PointerEvent) -> SessionState:
    def action(record: SessionRecord) -> SessionState:
        controller = record.controller
        x, y = to_logical(event.x, event.y, event.device_pixel_ratio)
        if event.type == "down":
            controller.pointer_down(x, y, event.pointer_id)
        elif event.type == "move":
            controller.pointer_move(x, y, event.pointer_id)
        elif event.type == "up":
            controller.pointer_up(event.pointer_id)
        else:
            controller.pointer_cancel(event.pointer_id)
        return _state(record)

    return _run(session_id, action)


@router.put("/sessions/{session_id}/tool")
def select_tool(session_id: str, request: ToolRequest) -> SessionState:
    def action(record: SessionRecord) -> SessionState:
        record.controller.select_tool(request.tool)
        return _state(record)

    return _run(session_id, action)


@router.put("/sessions/{session_id}/color")
def select_color(session_id: str, request: ColorRequest) -> SessionState:
    def action(record: SessionRecord) -> SessionState:
        record.controller.select_color(request.color)
        return _state(record)

    return _run(session_id, action)


# =====================================================================
#   PATTERN EDITS
# =====================================================================

@router.patch("/sessions/{session_id}/pattern")
def update_pattern(session_id: str, request: PatternUpdateRequest) -> SessionState:
    def action(record: SessionRecord) -> SessionState:
        pattern = record.controller.pattern
        if request.title is not None:
            pattern = pattern_edit.set_title(pattern, request.title)
        if request.width is not None or request.height is not None:
            pattern = pattern_edit.resize_pattern(pattern, width=request.width, height=request.height)
        if request.cell is not None:
            pattern = pattern_edit.set_cell_size(pattern, request.cell)
        if request.stitch is not None:
            pattern = pattern_edit.set_stitch(pattern, request.stitch)
        if request.palette is not None:
            pattern = pattern_edit.set_palette(pattern, request.palette)
        record.controller.replace(pattern)
        return _state(record)

    return _run(session_id, action)


@router.post("/sessions/{session_id}/zoom")
def zoom(session_id: str, request: ZoomRequest) -> SessionState:
    def action(record: SessionRecord) -> SessionState:
        record.controller.replace(pattern_edit.zoom(record.controller.pattern, request.steps))
        return _state(record)

    return _run(session_id, action)


@router.post("/sessions/{session_id}/fit")
def fit(session_id: str, request: FitRequest) -> SessionState:
    def action(record: SessionRecord) -> SessionState:
        record.controller.replace(pattern_edit.fit_to_width(record.controller.pattern, request.available))
        return _state(record)

    return _run(session_id, action)


@router.post("/sessions/{session_id}/clear")
def clear(session_id: str) -> SessionState:
    def action(record: SessionRecord) -> SessionState:
        record.controller.replace(pattern_edit.clear_pattern(record.controller.pattern))
        return _state(record)

    return _run(session_id, action)


# =====================================================================
#   IMPORT / EXPORT
# =====================================================================

@router.post("/sessions/{session_id}/import")
async def import_pattern(session_id: str, file: UploadFile = File(...)) -> SessionState:
    content = await file.read()
    try:
        pattern = parse_pattern(content)
    except PatternImportError as exc:
        logger.warning("Rejected import %r: %s", file.filename, exc)
        raise HTTPException(status_code=400, detail="Invalid pattern file.")

    def action(record: SessionRecord) -> SessionState:
        record.controller.load(pattern)
        return _state(record)

    return _run(session_id, action)


@router.get("/sessions/{session_id}/export.json")
def download_json(session_id: str) -> Response:
    pattern = _run(session_id, lambda record: record.controller.pattern)
    return Response(
        content=export_json(pattern),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{_download_name(pattern.title, "json")}"'},
    )


@router.get("/sessions/{session_id}/export.png")
def download_png(session_id: str) -> Response:
    def action(record: SessionRecord):
        pattern = record.controller.pattern
        return pattern.title, export_png(pattern, frame=record.view.frame())

    title, png = _run(session_id, action)
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{_download_name(title, "png")}"'},
    )


@router.get("/sessions/{session_id}/export.pdf")
def download_pdf(session_id: str) -> Response:
    pattern = _run(session_id, lambda record: record.controller.pattern)
    return Response(
        content=export_pdf(pattern),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{_download_name(pattern.title, "pdf")}"'},
    )


@router.get("/sessions/{session_id}/counts")
def color_counts(session_id: str) -> list[ColorCount]:
    legend = _run(session_id, lambda record: build_color_legend(record.controller.pattern.grid))
    return [ColorCount(**entry) for entry in legend]
