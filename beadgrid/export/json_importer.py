from __future__ import annotations

import json
import logging
from typing import Any, Union

from pydantic import ValidationError

from ..models.pattern import Pattern
from ..settings import STRICT_IMPORT

logger = logging.getLogger(__name__)


class PatternImportError(ValueError):
    """The supplied file is not a usable pattern."""


def parse_pattern(raw: Union[bytes, str, dict, Any], *, strict: bool = STRICT_IMPORT) -> Pattern:
    """
    Turn an imported file into a ``Pattern``.

    Only a missing or non-list ``grid`` is rejected outright. Dimensions that
    disagree with the grid are accepted unless ``strict`` is set.
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PatternImportError("Pattern file is not UTF-8 text") from exc
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PatternImportError("Pattern file is not valid JSON") from exc

    if not isinstance(raw, dict):
        raise PatternImportError("Pattern file must contain a JSON object")
    if not isinstance(raw.get("grid"), list):
        raise PatternImportError("Pattern file has no grid")

    try:
        pattern = Pattern.model_validate(raw)
    except ValidationError as exc:
        raise PatternImportError(f"Pattern file is malformed: {exc.error_count()} invalid field(s)") from exc

    if not pattern.is_consistent():
        if strict:
            raise PatternImportError("Pattern dimensions do not match its grid")
        logger.warning(
            "Imported pattern declares %dx%d but grid is %d rows",
            pattern.width,
            pattern.height,
            len(pattern.grid),
        )
    return pattern
