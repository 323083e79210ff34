"""Writing generated Go source and formatting it in place with gofmt."""

import shutil
import subprocess
from pathlib import Path
from typing import Optional

from ....logging_config import get_logger
from ...core.errors import FormattingError

logger = get_logger(__name__)

GOFMT = "gofmt"


def run_gofmt(path: Path, gofmt: Optional[str] = None) -> None:
    """
    Format a Go file in place.

    Raises:
        FormattingError: If gofmt is not installed or rejects the file.
    """
    binary = gofmt or shutil.which(GOFMT)
    if binary is None:
        raise FormattingError(f"{GOFMT} not found on PATH; cannot format {path}")

    try:
        completed = subprocess.run(
            [binary, "-w", str(path)],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise FormattingError(f"Failed to run {binary}: {e}") from e

    if completed.returncode != 0:
        message = completed.stderr.strip() or f"exit status {completed.returncode}"
        logger.error("gofmt failed for %s: %s", path, message)
        raise FormattingError(f"Failed to format {path}: {message}")

    logger.debug("Formatted %s", path)


def write_and_format(code: str, path: Path, format_in_place: bool = True) -> Path:
    """
    Write generated source, then format it in place.

    The written file is left on disk when formatting fails.
    """
    path = Path(path)
    try:
        path.write_text(code, encoding="utf-8")
    except OSError as e:
        raise FormattingError(f"Failed to write {path}: {e}") from e

    logger.info("Wrote %s", path)

    if format_in_place:
        run_gofmt(path)

    return path
