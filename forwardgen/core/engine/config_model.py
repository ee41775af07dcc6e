"""Config YAMLのモデル定義とロード機能

アクセサ生成オプションを定義する。
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator


class GeneratorConfig(BaseModel):
    """生成オプション"""

    class_suffix: str = "Accessors"
    emit_docstrings: bool = True
    emit_all: bool = True
    overwrite: bool = False
    output_file: str = Field(default="accessors.py")

    @field_validator("class_suffix")
    @classmethod
    def _check_class_suffix(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError(f"class_suffix must be a non-empty identifier: {value!r}")
        return value


def load_config(config_path: str | Path) -> GeneratorConfig:
    """Config YAMLをロードして検証

    Args:
        config_path: Config YAMLのパス

    Returns:
        GeneratorConfig: 検証済みConfig

    Raises:
        FileNotFoundError: ファイルが存在しない
        yaml.YAMLError: YAML形式エラー
        pydantic.ValidationError: Pydantic検証エラー
    """
    config_path_obj = Path(config_path)

    if not config_path_obj.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path_obj, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return GeneratorConfig.model_validate(data or {})
