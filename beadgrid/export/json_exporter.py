import json

from ..models.pattern import Pattern


def export_json(pattern: Pattern) -> str:
    """Serialise a pattern to the portable file schema."""
    return json.dumps(pattern.model_dump(), ensure_ascii=False, indent=2)
