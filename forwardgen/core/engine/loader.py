"""Loader: YAML→IR変換

YAML/JSON仕様を読み込み、IRに変換する。
forwardsの各エントリは呼び出し文字列（invocation）または構造化形式で記述する。
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from forwardgen.core.base.exceptions import GrammarError
from forwardgen.core.base.ir import AccessorMode, ForwardingRule, ForwardSpec, MetaSpec, SpecIR
from forwardgen.core.engine.grammar import check_member_name, is_valid_identifier, normalize_identifier, parse_invocation

_MODE_NAMES = {mode.value: mode for mode in AccessorMode}


def load_spec(spec_path: str | Path) -> SpecIR:
    """YAML/JSON仕様を読み込み、IRに変換

    Args:
        spec_path: 仕様ファイルのパス

    Returns:
        SpecIR: 統合IR

    Raises:
        ValueError: 未対応のファイル形式
        GrammarError: forwardsエントリが文法に一致しない
    """
    spec_path = Path(spec_path)
    with open(spec_path, encoding="utf-8") as f:
        if spec_path.suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(f)
        elif spec_path.suffix == ".json":
            data = json.load(f)
        else:
            raise ValueError(f"未対応のファイル形式: {spec_path.suffix}")

    return load_spec_data(data or {}, source=str(spec_path))


def load_spec_data(data: dict[str, Any], source: str = "<spec>") -> SpecIR:
    """辞書形式の仕様をIRに変換

    Args:
        data: 仕様データ
        source: エラー表示用のラベル

    Returns:
        SpecIR: 統合IR
    """
    if not isinstance(data, dict):
        raise GrammarError("spec document must be a mapping", source)

    meta = _load_meta(data.get("meta") or {}, str(data.get("version", "1.0")))
    type_aliases = _load_type_aliases(data.get("type_aliases") or {}, source)
    forwards = _load_forward_specs(data.get("forwards") or [], source)

    return SpecIR(meta=meta, forwards=forwards, type_aliases=type_aliases)


def _load_meta(meta_data: dict[str, Any], version: str) -> MetaSpec:
    """メタデータを読み込み"""
    return MetaSpec(
        name=meta_data.get("name", "unknown"),
        description=meta_data.get("description", ""),
        version=version,
    )


def _load_type_aliases(aliases_data: dict[str, Any], source: str) -> dict[str, str]:
    """型エイリアス定義を読み込み"""
    if not isinstance(aliases_data, dict):
        raise GrammarError("type_aliases must be a mapping", f"{source}:type_aliases")
    return {str(key): str(value) for key, value in aliases_data.items()}


def _load_forward_specs(forwards_data: list[Any], source: str) -> list[ForwardSpec]:
    """forwards定義をForwardSpecに変換"""
    if not isinstance(forwards_data, list):
        raise GrammarError("forwards must be a list", f"{source}:forwards")

    forwards = []
    for index, entry in enumerate(forwards_data):
        location = f"{source}:forwards[{index}]"
        if not isinstance(entry, dict):
            raise GrammarError("forward entry must be a mapping", location)

        if "invocation" in entry:
            spec = parse_invocation(str(entry["invocation"]), source=location)
        else:
            spec = _load_structured_forward(entry, location)

        spec.description = entry.get("description", spec.description)
        spec.parent_ref = entry.get("parent_ref")
        spec.inner_ref = entry.get("inner_ref")
        forwards.append(spec)
    return forwards


def _load_structured_forward(entry: dict[str, Any], location: str) -> ForwardSpec:
    """構造化形式のエントリを読み込み

    構造化形式ではルールごとにmodeを指定できる（混在可）。
    """
    parent = _require_identifier(entry, "parent", location)
    inner = check_member_name(entry.get("inner"), "'inner'", location)

    fields_data = entry.get("fields")
    if not isinstance(fields_data, list):
        raise GrammarError("'fields' must be a list (or use 'invocation')", location)

    rules = [_load_rule(rule_data, f"{location}.fields[{i}]") for i, rule_data in enumerate(fields_data)]
    return ForwardSpec(parent=parent, inner=inner, rules=rules, location=location)


def _load_rule(rule_data: Any, location: str) -> ForwardingRule:
    """ルール定義をForwardingRuleに変換"""
    if not isinstance(rule_data, dict):
        raise GrammarError("field rule must be a mapping with 'name' and 'type'", location)

    mode_name = rule_data.get("mode", AccessorMode.DIRECT_FIELD.value)
    if mode_name not in _MODE_NAMES:
        raise GrammarError(f"unknown mode {mode_name!r} (expected one of {sorted(_MODE_NAMES)})", location)

    return ForwardingRule(
        name=check_member_name(rule_data.get("name"), "'name'", location),
        return_type=_require_identifier(rule_data, "type", location),
        mode=_MODE_NAMES[mode_name],
        description=rule_data.get("description", ""),
    )


def _require_identifier(data: dict[str, Any], key: str, location: str) -> str:
    """必須の識別子フィールドを取得"""
    value = data.get(key)
    if not isinstance(value, str) or not is_valid_identifier(value):
        raise GrammarError(f"'{key}' must be a valid identifier, got {value!r}", location)
    return normalize_identifier(value)
