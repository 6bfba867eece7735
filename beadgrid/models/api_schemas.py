from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Literal, Any

from ..core.types import StitchType, ToolName


class SessionCreateRequest(BaseModel):
    restore: bool = True
    autosave_key: Optional[str] = None
    device_pixel_ratio: Optional[float] = Field(None, gt=0)


class SessionState(BaseModel):
    session_id: str
    tool: ToolName
    color: str
    gesture: Literal["idle", "dragging"]
    pattern: dict[str, Any]


class PointerEvent(BaseModel):
    type: Literal["down", "move", "up", "cancel"]
    x: float = 0.0
    y: float = 0.0
    pointer_id: int = 0
    device_pixel_ratio: float = Field(1.0, gt=0)


class ToolRequest(BaseModel):
    tool: ToolName


class ColorRequest(BaseModel):
    color: str = Field(..., min_length=1)


class PatternUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    cell: Optional[int] = None
    stitch: Optional[StitchType] = None
    palette: Optional[List[str]] = None


class ZoomRequest(BaseModel):
    steps: int = 1


class FitRequest(BaseModel):
    available: float = Field(..., gt=0)


class ColorCount(BaseModel):
    color: str
    count: int
    percent: float
