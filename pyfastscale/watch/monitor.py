"""
Folder monitoring and batch processing.

FolderMonitor polls an input folder and upscales every new image it finds
into the output folder. process_folder makes a single pass and returns a JSON
friendly summary. In both, a failing image is logged and reported but never
stops the remaining files from being processed.
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..errors import UpscaleError
from ..io import is_supported_image
from ..pipeline import Upscaler, UpscaleConfig

logger = logging.getLogger(__name__)


@dataclass
class FileResult:
    """Outcome of upscaling one file."""

    file: str
    success: bool
    output_path: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {key: value for key, value in asdict(self).items() if value is not None}


def _candidate_files(folder: Path, image_types) -> List[Path]:
    return sorted(
        path
        for path in folder.iterdir()
        if path.is_file() and is_supported_image(path.name, image_types)
    )


def _upscale_one(upscaler: Upscaler, path: Path, output_folder: Path) -> FileResult:
    output_path = upscaler.output_path_for(path, output_folder)
    try:
        upscaler.upscale_file(path, output_path)
    except (UpscaleError, OSError, ValueError) as e:
        logger.error("Error processing %s: %s", path.name, e)
        return FileResult(file=path.name, success=False, error=str(e))
    except Exception as e:
        # a single image never stops the rest of the folder
        logger.exception("Unexpected error processing %s", path.name)
        return FileResult(file=path.name, success=False, error=f"{type(e).__name__}: {e}")
    logger.info("Successfully upscaled %s to %s", path.name, output_path)
    return FileResult(file=path.name, success=True, output_path=str(output_path))


class FolderMonitor:
    """
    Poll a folder and upscale each new image once.

    Args:
        upscaler: Configured Upscaler
        config: Folder settings (default: the upscaler's config)
        sleep: Function used to wait between scans (default: time.sleep)
    """

    def __init__(
        self,
        upscaler: Upscaler,
        config: Optional[UpscaleConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.upscaler = upscaler
        self.config = config or upscaler.config
        self._sleep = sleep
        self.processed = set()

    @property
    def input_folder(self) -> Path:
        return self.config.input_folder

    @property
    def output_folder(self) -> Path:
        return self.config.output_folder

    def scan_once(self) -> List[FileResult]:
        """
        Upscale every supported file not yet processed successfully.

        Failed files are not remembered and are retried on the next scan.
        """
        if not self.input_folder.is_dir():
            logger.warning("Input folder %s does not exist", self.input_folder)
            return []
        self.output_folder.mkdir(parents=True, exist_ok=True)

        results = []
        for path in _candidate_files(self.input_folder, self.config.image_types):
            if path.name in self.processed:
                continue
            logger.info("Processing new image: %s", path.name)
            result = _upscale_one(self.upscaler, path, self.output_folder)
            if result.success:
                self.processed.add(path.name)
            results.append(result)
        return results

    def run(self, max_cycles: Optional[int] = None) -> None:
        """
        Scan, sleep ``scan_interval`` seconds, repeat.

        Args:
            max_cycles: Stop after this many scans (default: run forever)
        """
        logger.info("Starting monitoring of %s for images...", self.input_folder)
        cycle = 0
        while max_cycles is None or cycle < max_cycles:
            self.scan_once()
            cycle += 1
            if max_cycles is not None and cycle >= max_cycles:
                break
            self._sleep(self.config.scan_interval)


def process_folder(
    upscaler: Upscaler,
    input_folder: Path | str,
    output_folder: Path | str,
    image_types=None,
) -> Dict[str, object]:
    """
    Upscale every supported image of ``input_folder`` once.

    Returns:
        dict: ``{"success": True, "processed": n, "errors": m, "results": [...]}``
        or ``{"success": False, "message": ...}`` when the input folder is
        missing
    """
    input_folder = Path(input_folder)
    output_folder = Path(output_folder)
    image_types = image_types or upscaler.config.image_types

    if not input_folder.is_dir():
        return {"success": False, "message": "Input folder does not exist"}
    output_folder.mkdir(parents=True, exist_ok=True)

    results = [
        _upscale_one(upscaler, path, output_folder)
        for path in _candidate_files(input_folder, image_types)
    ]
    processed = sum(1 for r in results if r.success)
    return {
        "success": True,
        "processed": processed,
        "errors": len(results) - processed,
        "results": [r.to_dict() for r in results],
    }
