"""
Tests for configuration loading
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from receipt_text import ReceiptProcessor
from receipt_text.utils import DEFAULT_CONFIG_PATH, default_config, load_config


def test_shipped_config_matches_defaults():
    assert DEFAULT_CONFIG_PATH.exists()
    assert load_config() == default_config()


def test_missing_config_falls_back_to_defaults(tmp_path):
    assert load_config(str(tmp_path / "nope.yaml")) == default_config()


def test_partial_config_is_merged(tmp_path):
    config_file = tmp_path / "receipt_config.yaml"
    config_file.write_text(
        "scoring:\n"
        "  penalties:\n"
        "    total_missing: 0.5\n"
        "  consistency_tolerance: 1.0\n",
        encoding="utf-8",
    )

    config = load_config(str(config_file))
    assert config["scoring"]["penalties"]["total_missing"] == 0.5
    assert config["scoring"]["penalties"]["date_missing"] == 0.20
    assert config["scoring"]["consistency_tolerance"] == 1.0
    assert config["logging"]["level"] == "INFO"

    processor = ReceiptProcessor(config_path=str(config_file))
    assert processor.scorer.penalty("total_missing") == 0.5
    assert processor.tolerance == 1.0


def test_empty_config_file(tmp_path):
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("", encoding="utf-8")
    assert load_config(str(config_file)) == default_config()


def test_invalid_config_file(tmp_path):
    config_file = tmp_path / "bad.yaml"
    config_file.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(config_file))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
