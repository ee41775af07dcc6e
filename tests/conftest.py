"""pytest設定とフィクスチャ定義"""

import sys
from pathlib import Path

import pytest
import yaml

REPO_ROOT = Path(__file__).parent.parent
FIXTURES_DIR = Path(__file__).parent / "fixtures"

# forward_models（integrity検証用クラス）をインポート可能にする
if str(FIXTURES_DIR) not in sys.path:
    sys.path.insert(0, str(FIXTURES_DIR))


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def sample_spec_yaml():
    """最小限の転送定義（DirectField / AccessorCall）"""
    return {
        "version": "1",
        "meta": {"name": "fake-inheritance", "description": "テスト用転送定義"},
        "forwards": [
            {"invocation": "A, fi, fields = [a: int; b: int;]"},
            {"invocation": "B, fi, fields = [f(a): int; f(b): int;]"},
        ],
    }


@pytest.fixture
def write_spec(tmp_path):
    """仕様辞書をYAMLファイルに書き出すファクトリ"""

    def _write(data: dict, name: str = "spec.yaml") -> Path:
        spec_path = tmp_path / name
        with open(spec_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, allow_unicode=True, sort_keys=False)
        return spec_path

    return _write
