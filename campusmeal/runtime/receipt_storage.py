"""Writing rendered receipts and reports to disk.

Directory structure (under the configured output directory):
    receipts/   - Booking receipts and payment confirmations (PDF)
    reports/    - Admin report exports (PDF/CSV/JSON)
"""

import os
import tempfile
from pathlib import Path

from campusmeal.runtime.logging import get_logger

logger = get_logger(__name__)

RECEIPTS_SUBDIR = "receipts"
REPORTS_SUBDIR = "reports"


def receipts_dir(output_dir: Path) -> Path:
    return output_dir / RECEIPTS_SUBDIR


def reports_dir(output_dir: Path) -> Path:
    return output_dir / REPORTS_SUBDIR


def _available_path(directory: Path, filename: str) -> Path:
    """Return ``directory/filename``, appending a counter on collision."""
    filepath = directory / filename
    stem = filepath.stem
    suffix = filepath.suffix
    counter = 1
    while filepath.exists():
        filepath = directory / f"{stem}_{counter}{suffix}"
        counter += 1
    return filepath


def save_document(content: bytes, directory: Path, filename: str, overwrite: bool = False) -> Path:
    """
    Write ``content`` to ``directory/filename``.

    The bytes go to a temporary file in the same directory first and are
    moved into place once complete, so readers never see a partial file.

    Args:
        content: Rendered document bytes
        directory: Target directory (created if missing)
        filename: Target file name
        overwrite: Replace an existing file instead of picking a new name

    Returns:
        Path to the saved file
    """
    directory.mkdir(parents=True, exist_ok=True)
    filepath = directory / filename if overwrite else _available_path(directory, filename)

    with tempfile.NamedTemporaryFile(dir=directory, prefix=".partial-", delete=False) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(content)
        except OSError:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise
    os.replace(tmp_path, filepath)

    logger.info("Saved %s (%d bytes)", filepath, len(content))
    return filepath
