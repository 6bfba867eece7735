from datetime import datetime

from fastapi import APIRouter

from ..core.sessions import store as session_store

router = APIRouter()


def _datetimeformat(value: float | int | None) -> str:
    if not value:
        return "—"
    return datetime.fromtimestamp(value).strftime("%Y-%m-%d %H:%M:%S")


@router.get("/sessions")
async def list_sessions():
    items = []
    for record in session_store.list():
        data = record.to_dict()
        data["created"] = _datetimeformat(record.created_at)
        data["updated"] = _datetimeformat(record.updated_at)
        items.append(data)
    return {"items": items, "total": len(items)}
