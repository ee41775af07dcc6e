"""Validator: IR検証

IRの意味論チェックを行う。
主な検証項目:
1. 親型ごとのアクセサ名の重複
2. アクセサ名と委譲先メンバー名の衝突
3. クラス本体でname manglingされる名前

名前はNFKC正規化してから比較する（Pythonは "ﬁ" と "fi" を同じ識別子として扱う）。

戻り値型の妥当性や委譲先フィールドの存在は検証しない（integrity検証で扱う）。
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path

from forwardgen.core.base.exceptions import GrammarError
from forwardgen.core.base.ir import SpecIR
from forwardgen.core.engine.grammar import is_mangled_name, normalize_identifier
from forwardgen.core.engine.validate_formatter import categorize_error, create_category_dict, record_successes


def validate_ir(ir: SpecIR) -> list[str]:
    """IR全体の意味論チェック

    Args:
        ir: 検証対象のIR

    Returns:
        エラーメッセージのリスト（空の場合はエラーなし）
    """
    errors: list[str] = []

    for parent in ir.parents():
        # アクセサ名の重複
        errors.extend(_validate_accessor_duplicates(ir, parent))

        # 委譲先メンバー名との衝突
        errors.extend(_validate_inner_shadowing(ir, parent))

        # name mangling
        errors.extend(_validate_mangled_names(ir, parent))

    return errors


def _validate_accessor_duplicates(ir: SpecIR, parent: str) -> list[str]:
    """同一親型内の重複アクセサ名をチェック

    複数エントリで同じ親型を指定した場合も1つの型として扱う。
    """
    names = [normalize_identifier(rule.name) for spec in ir.forwards_for(parent) for rule in spec.rules]
    duplicates = sorted(name for name, count in Counter(names).items() if count > 1)
    if duplicates:
        return [f"Parent '{parent}': duplicate accessor names: {duplicates}"]
    return []


def _validate_inner_shadowing(ir: SpecIR, parent: str) -> list[str]:
    """アクセサ名が委譲先メンバー名と一致していないかチェック"""
    specs = ir.forwards_for(parent)
    inner_names = {normalize_identifier(spec.inner) for spec in specs}

    errors = []
    for spec in specs:
        for rule in spec.rules:
            if normalize_identifier(rule.name) in inner_names:
                errors.append(
                    f"Parent '{parent}', accessor '{rule.name}': "
                    f"shadowed by inner member '{rule.name}' ({spec.location})"
                )
    return errors


def _validate_mangled_names(ir: SpecIR, parent: str) -> list[str]:
    """name manglingされる名前（"__x"）をチェック

    生成されるMixinクラス内では ``self.__x`` が ``self._<Class>__x`` に変換され、
    親型が保持する属性を参照できない。
    """
    errors = []
    for spec in ir.forwards_for(parent):
        if is_mangled_name(spec.inner):
            errors.append(f"Parent '{parent}': inner member '{spec.inner}' would be name-mangled ({spec.location})")
        for rule in spec.rules:
            if is_mangled_name(rule.name):
                errors.append(
                    f"Parent '{parent}', accessor '{rule.name}': would be name-mangled ({spec.location})"
                )
    return errors


def _validate_empty_field_lists(ir: SpecIR) -> list[str]:
    """空のfield listを警告として検出"""
    warnings = []
    for spec in ir.forwards:
        if not spec.rules:
            warnings.append(f"Parent '{spec.parent}' ({spec.location}): empty field list, no accessors generated")
    return warnings


def validate_spec(spec_path: str | Path, normalize: bool = True) -> dict[str, dict[str, list[str]]]:
    """Spec YAMLファイルを読み込み、エラー/警告/成功をカテゴリ別に返す

    Args:
        spec_path: Spec YAMLファイルのパス
        normalize: IRを正規化してから検証

    Returns:
        3層構造の辞書: {"errors": {...}, "warnings": {...}, "successes": {...}}
        各層はカテゴリ別のメッセージリスト
    """
    from forwardgen.core.engine.loader import load_spec

    errors = create_category_dict()
    warnings = create_category_dict()
    successes = create_category_dict()

    try:
        ir = load_spec(spec_path)
    except GrammarError as exc:
        # 文法エラーの場合はそれ以上検証しない
        errors["grammar"].append(str(exc))
        return {"errors": errors, "warnings": warnings, "successes": successes}

    if normalize:
        from forwardgen.core.engine.normalizer import normalize_ir

        ir = normalize_ir(ir)

    for error in validate_ir(ir):
        categorize_error(error, errors)

    warnings["rules"].extend(_validate_empty_field_lists(ir))

    record_successes(ir, errors, successes)

    return {"errors": errors, "warnings": warnings, "successes": successes}
