"""Import/export helpers for bead patterns."""

from .json_exporter import export_json
from .json_importer import PatternImportError, parse_pattern
from .pdf_exporter import export_pdf
from .png_exporter import export_png


def export_filename(title: str, extension: str) -> str:
    return f"{title or 'pattern'}.{extension}"


__all__ = [
    "export_filename",
    "export_json",
    "export_pdf",
    "export_png",
    "parse_pattern",
    "PatternImportError",
]
