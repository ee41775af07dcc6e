"""Python アクセサモジュール生成バックエンド

IRから親型ごとのアクセサMixinクラスを含むPythonモジュールを生成する。
生成されたクラスを親型の基底クラスに加えることで、
``parent.a()`` が ``parent.inner.a`` （または ``parent.inner.a()``）を返すようになる。
"""

from __future__ import annotations

import logging
from pathlib import Path

from forwardgen.core.base.ir import SpecIR
from forwardgen.core.engine.config_model import GeneratorConfig
from forwardgen.backends.py_codegen import (
    accessor_class_name,
    build_file_content,
    render_accessor_class,
    render_all,
)

logger = logging.getLogger(__name__)


def generate_accessor_module(ir: SpecIR, config: GeneratorConfig | None = None) -> str:
    """アクセサモジュールのソースを生成

    親型は初出順、アクセサはルール定義順に出力する。
    検証は行わない（validate_irを事前に実行すること）。

    Args:
        ir: 統合IR（正規化済み）
        config: 生成オプション

    Returns:
        生成されたPythonソース
    """
    config = config or GeneratorConfig()

    parents = ir.parents()
    sections = [
        render_accessor_class(parent, ir.forwards_for(parent), config.class_suffix, config.emit_docstrings)
        for parent in parents
    ]
    class_names = [accessor_class_name(parent, config.class_suffix) for parent in parents]
    all_definition = render_all(class_names) if config.emit_all else None

    accessor_count = sum(len(spec.rules) for spec in ir.forwards)
    logger.debug(f"Generated {accessor_count} accessor(s) on {len(parents)} parent type(s) for '{ir.meta.name}'")

    return build_file_content(f"Forwarding accessors for {ir.meta.name}", sections, all_definition)


def write_accessor_module(ir: SpecIR, output_path: str | Path, config: GeneratorConfig | None = None) -> bool:
    """アクセサモジュールをファイルに書き込む

    既存ファイルはconfig.overwriteがTrueの場合のみ上書きする。
    生成は書き込み前に完了するため、失敗時に部分的なファイルは残らない。

    Args:
        ir: 統合IR（正規化済み）
        output_path: 出力ファイルパス
        config: 生成オプション

    Returns:
        書き込んだ場合True、既存ファイルのためスキップした場合False
    """
    config = config or GeneratorConfig()
    output_path = Path(output_path)

    if output_path.exists() and not config.overwrite:
        logger.info(f"Skip (file exists): {output_path}")
        return False

    content = generate_accessor_module(ir, config)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    logger.info(f"Generated: {output_path}")
    return True
