from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from beadgrid.core.controller import EditorController  # noqa: E402
from beadgrid.core.fill import flood_fill  # noqa: E402
from beadgrid.core.geometry import cell_top_left  # noqa: E402
from beadgrid.core.grid import create  # noqa: E402
from beadgrid.core.render import render_png  # noqa: E402
from beadgrid.models.pattern import Pattern  # noqa: E402


def _timed(fn) -> float:
    start = time.perf_counter()
    fn()
    return round((time.perf_counter() - start) * 1000, 2)


def run_case(size: int, cell: int, stitch: str, output_dir: Path | None) -> dict:
    pattern = Pattern(width=size, height=size, cell=cell, stitch=stitch, grid=create(size, size))

    fill_ms = _timed(lambda: flood_fill(pattern.grid, 0, 0, "#ff007a"))

    controller = EditorController(pattern, tool="pencil", color="#000000")
    controller.pointer_down(*cell_top_left(stitch, 0, 0, cell))
    drag_ms = _timed(
        lambda: [controller.pointer_move(*cell_top_left(stitch, r, r, cell)) for r in range(size)]
    )
    controller.pointer_up()

    png = b""

    def _render() -> None:
        nonlocal png
        png = render_png(controller.pattern)

    render_ms = _timed(_render)
    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        (output_dir / f"{stitch}_{size}.png").write_bytes(png)

    return {
        "grid": {"width": size, "height": size},
        "stitch": stitch,
        "cell": cell,
        "fill_ms": fill_ms,
        "drag_ms": drag_ms,
        "render_ms": render_ms,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Time flood fill, drag painting and rendering")
    parser.add_argument("--sizes", type=int, nargs="+", default=[32, 100, 200])
    parser.add_argument("--cell", type=int, default=12)
    parser.add_argument("--output", type=Path, default=Path("data/bench/bench.json"))
    parser.add_argument("--results", type=Path, default=None, help="Directory for rendered PNGs")
    args = parser.parse_args()

    results = []
    for size in args.sizes:
        for stitch in ("square", "peyote"):
            results.append(run_case(size, args.cell, stitch, args.results))

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(json.dumps(results, indent=2), encoding="utf-8")


if __name__ == "__main__":
    main()
