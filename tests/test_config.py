"""GeneratorConfigのテスト"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from forwardgen.core.engine.config_model import GeneratorConfig, load_config

FIXTURES = Path(__file__).parent / "fixtures"


def test_defaults():
    config = GeneratorConfig()

    assert config.class_suffix == "Accessors"
    assert config.emit_docstrings is True
    assert config.emit_all is True
    assert config.overwrite is False
    assert config.output_file == "accessors.py"


def test_load_config():
    config = load_config(FIXTURES / "generator_config.yaml")

    assert config.class_suffix == "Mixin"
    assert config.emit_docstrings is False
    assert config.overwrite is True
    assert config.output_file == "generated_mixins.py"


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_load_config_empty_file(tmp_path):
    """空ファイルはデフォルト値"""
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == GeneratorConfig()


@pytest.mark.parametrize("suffix", ["", "Not-Valid", "1st"])
def test_invalid_class_suffix(suffix):
    with pytest.raises(ValidationError):
        GeneratorConfig(class_suffix=suffix)
