"""End-to-end tests for the batch pipeline and command line."""

import json
from pathlib import Path

import pytest

from content_box.config import load_config_from_dict
from content_box.exceptions import TaskCancelledError
from content_box.pipeline import ContentBoxPipeline, main
from content_box.processors import load_grayscale_image, save_image
from content_box.status import TaskStatus

from conftest import make_framed_page


@pytest.fixture
def scan_dir(temp_dir):
    """Input directory with one framed page and one unreadable file."""
    input_dir = temp_dir / "input"
    save_image(make_framed_page(), input_dir / "page.png")
    (input_dir / "broken.png").write_bytes(b"not a png")
    return input_dir


@pytest.fixture
def config(temp_dir):
    return load_config_from_dict({
        "directories": {
            "input_dir": str(temp_dir / "input"),
            "output_dir": str(temp_dir / "output"),
        },
        "source": {"default_dpi": 150, "read_dpi_from_metadata": False},
        "logging": {"use_rich": False},
    })


def test_process_image(scan_dir, config):
    """Test detection and JSON output for one image."""
    pipeline = ContentBoxPipeline(config)
    result = pipeline.process_image(scan_dir / "page.png")

    assert result.found
    assert result.image_size == (400, 300)
    assert (result.box.x, result.box.y, result.box.width, result.box.height) == \
        pytest.approx((51, 51, 299, 199))

    json_path = config.output_dir / "page_content_box.json"
    assert json_path in result.outputs
    data = json.loads(json_path.read_text())
    assert data["found"] is True
    assert data["dpi"] == [150, 150]
    assert data["content_box"]["width"] == pytest.approx(299)


def test_process_image_records_errors(scan_dir, config):
    pipeline = ContentBoxPipeline(config)
    result = pipeline.process_image(scan_dir / "broken.png")

    assert not result.found
    assert "Could not load image" in result.error
    data = json.loads((config.output_dir / "broken_content_box.json").read_text())
    assert data["content_box"] is None
    assert data["error"] == result.error


def test_process_directory(scan_dir, config):
    """Test batch processing with a summary file."""
    pipeline = ContentBoxPipeline(config)
    results = pipeline.process_directory()

    assert [r.image_path.name for r in results] == ["broken.png", "page.png"]
    summary = json.loads((config.output_dir / "content_box_summary.json").read_text())
    assert summary["total"] == 2
    assert summary["found"] == 1
    assert summary["failed"] == 1


def test_cropped_output(scan_dir, config):
    config.output.save_cropped = True
    pipeline = ContentBoxPipeline(config)
    result = pipeline.process_image(scan_dir / "page.png")

    cropped_path = config.output_dir / "page_cropped.png"
    assert cropped_path in result.outputs
    cropped = load_grayscale_image(cropped_path)
    assert cropped.shape == (199, 299)
    assert (cropped == 255).all()


@pytest.mark.parametrize("rotation, shape", [(90, (299, 199)), (180, (199, 299))])
def test_rotated_crop_excludes_border(scan_dir, config, rotation, shape):
    """Test that crops of rotated scans hold only page pixels."""
    config.source.rotation = rotation
    config.output.save_cropped = True
    pipeline = ContentBoxPipeline(config)
    pipeline.process_image(scan_dir / "page.png")

    cropped = load_grayscale_image(config.output_dir / "page_cropped.png")
    assert cropped.shape == shape
    assert (cropped == 255).all()


def test_debug_output(scan_dir, config):
    config.debug.save_debug_images = True
    pipeline = ContentBoxPipeline(config)
    result = pipeline.process_image(scan_dir / "page.png")

    debug_dir = config.output_dir / "debug"
    assert debug_dir / "page_gray150.png" in result.outputs
    assert (debug_dir / "page_bw150.png").exists()


def test_missing_input_directory(temp_dir, config):
    with pytest.raises(ValueError):
        ContentBoxPipeline(config).process_directory(temp_dir / "missing")


def test_empty_input_directory(temp_dir, config):
    empty = temp_dir / "empty"
    empty.mkdir()
    assert ContentBoxPipeline(config).process_directory(empty) == []


def test_cancellation_aborts_batch(scan_dir, config):
    status = TaskStatus()
    status.cancel()
    with pytest.raises(TaskCancelledError):
        ContentBoxPipeline(config).process_directory(status=status)


def test_main_single_file(scan_dir, temp_dir, capsys):
    """Test the command line on a single image."""
    exit_code = main([
        str(scan_dir / "page.png"), "-o", str(temp_dir / "cli"), "--dpi", "150", "--quiet"
    ])

    assert exit_code == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed["found"] is True
    assert Path(temp_dir / "cli" / "page_content_box.json").exists()


def test_main_directory_with_failures(scan_dir, temp_dir):
    assert main([str(scan_dir), "-o", str(temp_dir / "cli"), "--dpi", "150", "--quiet"]) == 1


def test_main_missing_input(temp_dir):
    assert main([str(temp_dir / "missing"), "--quiet"]) == 1


def test_main_bad_config(temp_dir):
    config_path = temp_dir / "config.json"
    config_path.write_text('{"source": {"default_dpi": -5}}')
    assert main([str(temp_dir), "-c", str(config_path)]) == 1
