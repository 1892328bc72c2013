"""Config loading tests. Every test uses its own temporary directory."""
from __future__ import annotations

from pathlib import Path

from monocam.config import CONFIG_DIR_ENV, DEFAULT_CONFIG_FILENAME, Config, get_app_dir


def _write(directory: Path, text: str) -> None:
    (directory / DEFAULT_CONFIG_FILENAME).write_text(text)


def test_first_run_writes_defaults(tmp_path: Path) -> None:
    app_dir = tmp_path / "monocam"
    config = Config(app_dir)

    assert (app_dir / DEFAULT_CONFIG_FILENAME).exists()
    assert config.hotkey == "<f4>"
    assert config.global_hotkey is False
    assert config.camera_index == 0
    assert config.color_scheme == 0
    assert config.ocr_engine == "easyocr"
    assert config.ocr_languages == ["en"]
    assert config.ocr_max_pending == 4
    assert config.log_level == "INFO"


def test_defaults_file_round_trips(tmp_path: Path) -> None:
    Config(tmp_path)
    reloaded = Config(tmp_path)
    assert reloaded.frame_interval_ms == 33
    assert reloaded.ocr_page_segmentation_mode == 3


def test_file_overrides_defaults(tmp_path: Path) -> None:
    _write(tmp_path, "\n".join([
        "[Camera]",
        "index = 2",
        "[Display]",
        "color_scheme = 3",
        "[OCR]",
        "engine = tesseract",
        "languages = en, de ,",
        "gpu = yes",
        "confidence_threshold = 0.4",
        "[Logging]",
        "level = debug",
    ]))
    config = Config(tmp_path)

    assert config.camera_index == 2
    assert config.color_scheme == 3
    assert config.ocr_engine == "tesseract"
    assert config.ocr_languages == ["en", "de"]
    assert config.ocr_gpu is True
    assert config.ocr_confidence_threshold == 0.4
    assert config.log_level == "DEBUG"
    # Keys missing from the file keep their defaults.
    assert config.hotkey == "<f4>"


def test_zero_max_pending_means_unbounded(tmp_path: Path) -> None:
    _write(tmp_path, "[OCR]\nmax_pending = 0\n")
    assert Config(tmp_path).ocr_max_pending is None


def test_frame_interval_is_at_least_one(tmp_path: Path) -> None:
    _write(tmp_path, "[Camera]\nframe_interval_ms = 0\n")
    assert Config(tmp_path).frame_interval_ms == 1


def test_unparsable_file_falls_back_to_defaults(tmp_path: Path) -> None:
    _write(tmp_path, "this is not an ini file\n")
    assert Config(tmp_path).ocr_engine == "easyocr"


def test_environment_overrides_app_dir(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path))
    assert get_app_dir() == tmp_path
    assert Config().config_file_path == tmp_path / DEFAULT_CONFIG_FILENAME
