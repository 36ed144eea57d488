"""Batch content box detection over image files, with a command line interface."""

import argparse
import json
import logging
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import cv2
from tqdm import tqdm

from .config import Config, get_default_config, load_config
from .cropping import crop_to_box, rotate_orthogonal
from .debug import DebugImages
from .exceptions import ContentBoxError, TaskCancelledError
from .geometry import Dpi, FloatRect
from .page_finder import PageFinder
from .processors import (
    get_image_files,
    load_grayscale_image,
    load_image,
    read_image_dpi,
    save_image,
)
from .status import TaskStatus
from .transformation import ImageTransformation
from .utils.logging_utils import log_processing_stats, setup_logging

logger = logging.getLogger(__name__)


@dataclass
class PageResult:
    """Outcome of content box detection for one image."""
    image_path: Path
    dpi: Optional[Dpi] = None
    image_size: Optional[tuple] = None
    box: FloatRect = field(default_factory=FloatRect)
    elapsed: float = 0.0
    error: Optional[str] = None
    outputs: List[Path] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.error is None and not self.box.is_empty

    def to_dict(self) -> Dict[str, Any]:
        return {
            "image": self.image_path.name,
            "dpi": [self.dpi.horizontal, self.dpi.vertical] if self.dpi else None,
            "image_size": list(self.image_size) if self.image_size else None,
            "content_box": self.box.to_dict() if not self.box.is_empty else None,
            "found": self.found,
            "elapsed_seconds": round(self.elapsed, 4),
            "error": self.error,
        }


class ContentBoxPipeline:
    """Runs page box detection over single images or directories."""

    def __init__(self, config: Optional[Config] = None,
                 page_finder: Optional[PageFinder] = None):
        self.config = config or get_default_config()
        self.page_finder = page_finder or PageFinder()

    def _source_dpi(self, image_path: Path) -> Dpi:
        default = self.config.source.default_dpi
        if self.config.source.read_dpi_from_metadata:
            return read_image_dpi(image_path, default)
        return Dpi(default, default)

    def process_image(
        self,
        image_path: Path,
        output_dir: Optional[Path] = None,
        status: Optional[TaskStatus] = None,
    ) -> PageResult:
        """Detect the content box of one image and write its outputs.

        Errors other than cancellation are recorded in the result rather
        than raised.
        """
        image_path = Path(image_path)
        output_dir = Path(output_dir) if output_dir else self.config.output_dir
        result = PageResult(image_path=image_path)
        start_time = time.time()

        try:
            gray = load_grayscale_image(image_path)
            result.image_size = (gray.shape[1], gray.shape[0])
            result.dpi = self._source_dpi(image_path)

            xform = ImageTransformation.for_image(
                gray, result.dpi, self.config.source.rotation
            )
            dbg = DebugImages() if self.config.debug.save_debug_images else None
            result.box = self.page_finder.find_page_box(gray, xform, dbg, status)

            if result.box.is_empty:
                logger.warning(f"No content box found in {image_path.name}")
            else:
                logger.info(f"{image_path.name}: content box {result.box.to_dict()}")

            if dbg is not None:
                result.outputs.extend(dbg.save_to_dir(
                    self.config.debug_dir,
                    prefix=image_path.stem,
                    image_format=self.config.debug.debug_image_format,
                    quality=self.config.debug.debug_compression_quality,
                ))
            if self.config.output.save_cropped and not result.box.is_empty:
                cropped_path = self._save_cropped(image_path, result.box, output_dir)
                if cropped_path is not None:
                    result.outputs.append(cropped_path)

        except TaskCancelledError:
            raise
        except (ContentBoxError, cv2.error) as e:
            logger.error(f"Error processing {image_path}: {e}")
            result.error = str(e)

        result.elapsed = time.time() - start_time

        if self.config.output.save_json:
            json_path = output_dir / f"{image_path.stem}{self.config.output.json_suffix}"
            _write_json(result.to_dict(), json_path)
            result.outputs.append(json_path)

        return result

    def _save_cropped(self, image_path: Path, box: FloatRect,
                      output_dir: Path) -> Optional[Path]:
        rotation = self.config.source.rotation
        if rotation % 90:
            logger.warning(f"Skipping crop of {image_path.name}: "
                           f"rotation {rotation} is not a multiple of 90 degrees")
            return None

        image = rotate_orthogonal(load_image(image_path), rotation)
        cropped = crop_to_box(image, box)
        if cropped is None:
            return None

        cropped_path = output_dir / f"{image_path.stem}{self.config.output.cropped_suffix}"
        save_image(cropped, cropped_path)
        return cropped_path

    def process_directory(
        self,
        input_dir: Optional[Path] = None,
        output_dir: Optional[Path] = None,
        status: Optional[TaskStatus] = None,
    ) -> List[PageResult]:
        """Process every image in a directory and write a summary.

        Raises:
            ValueError: If the input directory does not exist
        """
        input_dir = Path(input_dir) if input_dir else self.config.input_dir
        output_dir = Path(output_dir) if output_dir else self.config.output_dir

        if not input_dir.exists():
            raise ValueError(f"Input directory does not exist: {input_dir}")

        image_files = get_image_files(input_dir)
        if not image_files:
            logger.warning(f"No image files found in {input_dir}")
            return []

        output_dir.mkdir(parents=True, exist_ok=True)
        results = []

        with log_processing_stats(f"content box detection of {input_dir}", logger) as stats:
            for image_path in tqdm(image_files, desc="Detecting content boxes", unit="img"):
                result = self.process_image(image_path, output_dir, status)
                results.append(result)
                if result.error is None:
                    stats["files_processed"] += 1
                else:
                    stats["files_failed"] += 1

        summary = {
            "input_dir": str(input_dir),
            "total": len(results),
            "found": sum(1 for r in results if r.found),
            "failed": sum(1 for r in results if r.error is not None),
            "results": [r.to_dict() for r in results],
        }
        _write_json(summary, output_dir / self.config.output.summary_filename)

        return results


def _write_json(data: Dict[str, Any], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open('w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def main(argv: Optional[List[str]] = None) -> int:
    """Command line interface."""
    parser = argparse.ArgumentParser(
        description="Detect the content box of scanned pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  content-box scans/                      # Process a directory (config defaults)
  content-box page.png                    # Process a single image
  content-box scans/ -o results/ --crop   # Also write cropped pages
  content-box page.tif --dpi 600 --debug  # Override scan density, keep debug images
        """,
    )
    parser.add_argument(
        "input", nargs="?", help="Input directory or file (default: use config)"
    )
    parser.add_argument("-o", "--output", help="Output directory (default: use config)")
    parser.add_argument("-c", "--config", help="Configuration file (JSON, YAML or TOML)")
    parser.add_argument("--dpi", type=float, help="Scan density, overrides file metadata")
    parser.add_argument("--rotation", type=float, help="Rotate the source by this many degrees")
    parser.add_argument("--crop", action="store_true", help="Save images cropped to the content box")
    parser.add_argument("--debug", action="store_true", help="Save debug images")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else get_default_config()
    except ContentBoxError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        config.logging.level = "DEBUG"
    elif args.quiet:
        config.logging.level = "WARNING"
    setup_logging(
        level=config.logging.level,
        log_file=config.logging.log_file,
        use_rich=config.logging.use_rich,
        format_style=config.logging.format_style,
    )

    if args.output:
        config.directories.output_dir = args.output
    if args.dpi:
        config.source.default_dpi = args.dpi
        config.source.read_dpi_from_metadata = False
    if args.rotation is not None:
        config.source.rotation = args.rotation
    if args.crop:
        config.output.save_cropped = True
    if args.debug:
        config.debug.save_debug_images = True

    input_path = Path(args.input) if args.input else config.input_dir
    pipeline = ContentBoxPipeline(config)
    status = TaskStatus()

    try:
        if input_path.is_file():
            result = pipeline.process_image(input_path, status=status)
            print(json.dumps(result.to_dict(), indent=2))
            return 0 if result.error is None else 1

        results = pipeline.process_directory(input_path, status=status)
    except ValueError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130

    failed = [r for r in results if r.error is not None]
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
