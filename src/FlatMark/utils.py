from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

OUTPUT_SUFFIXES = {
    "text": ".txt",
    "yaml": ".yaml",
    "json": ".json",
    "html": ".html",
}


def configure_logging(verbose: bool = False) -> None:
    """Configure a simple console logger."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(message)s",
    )


def resolve_output_path(input_path: Path, output: Optional[str], fmt: str) -> Path | None:
    if fmt not in OUTPUT_SUFFIXES:
        raise ValueError(f"Unknown output format: {fmt}")
    if not output:
        return None
    out_path = Path(output)
    if out_path.is_dir():
        out_path = out_path / f"{input_path.stem}{OUTPUT_SUFFIXES[fmt]}"
    return out_path


def read_markdown(path: Path) -> bytes:
    return path.read_bytes()
