"""Python アクセサ実行時付与バックエンド

ルールごとにクロージャを組み立て、既存クラスに直接付与する。
呼び出し時の動作は生成モジュール版と同一（間接参照は ``self.inner`` のみ）。
"""

from __future__ import annotations

import logging
import operator
from collections import Counter
from collections.abc import Callable
from dataclasses import replace
from typing import Any, TypeVar

from forwardgen.core.base.exceptions import AccessorConflictError
from forwardgen.core.base.ir import FORWARDED_MARKER, AccessorMode, ForwardingRule, ForwardSpec
from forwardgen.core.engine.grammar import check_member_name, parse_field_list

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)


def _make_accessor(inner: str, rule: ForwardingRule, docstring: bool) -> Callable[[Any], Any]:
    """1ルール分のアクセサ関数を作成"""
    get_target = operator.attrgetter(f"{inner}.{rule.name}")

    if rule.mode is AccessorMode.ACCESSOR_CALL:

        def accessor(self):
            return get_target(self)()

        expression = f"self.{inner}.{rule.name}()"
    else:

        def accessor(self):
            return get_target(self)

        expression = f"self.{inner}.{rule.name}"

    accessor.__name__ = rule.name
    accessor.__annotations__ = {"return": rule.return_type}
    accessor.__doc__ = (rule.description.strip() or f"Return ``{expression}``.") if docstring else None
    return accessor


def build_accessors(spec: ForwardSpec, docstring: bool = True) -> dict[str, Callable[..., object]]:
    """ForwardSpecのアクセサ関数を作成

    Args:
        spec: 転送定義（名前は正規化済みであること）
        docstring: docstringを付与するか

    Returns:
        アクセサ名 -> 関数 の辞書（ルール定義順）
    """
    return {rule.name: _make_accessor(spec.inner, rule, docstring) for rule in spec.rules}


def _normalize_names(spec: ForwardSpec, source: str) -> ForwardSpec:
    """委譲先メンバー名とルール名を検査・正規化したForwardSpecを返す"""
    inner = check_member_name(spec.inner, "inner member name", source)
    rules = [replace(rule, name=check_member_name(rule.name, "field name", source)) for rule in spec.rules]
    return replace(spec, inner=inner, rules=rules)


def attach_accessors(cls: T, spec: ForwardSpec, docstring: bool = True) -> T:
    """アクセサを既存クラスに付与

    付与前に全ての名前を検査し、衝突がある場合は何も付与せずに例外を送出する。

    Args:
        cls: 親型クラス
        spec: 転送定義
        docstring: docstringを付与するか

    Returns:
        アクセサを付与したクラス（clsそのもの）

    Raises:
        GrammarError: 名前が識別子でない、またはname manglingされる
        AccessorConflictError: クラスに同名の属性が既に定義されている、またはルール名が重複している
    """
    spec = _normalize_names(spec, spec.location or f"<attach on {cls.__qualname__}>")

    names = [rule.name for rule in spec.rules]
    duplicates = sorted(name for name, count in Counter(names).items() if count > 1)
    if duplicates:
        raise AccessorConflictError(f"{cls.__qualname__}: duplicate accessor names: {duplicates}")

    existing = [name for name in names if name in cls.__dict__]
    if existing:
        raise AccessorConflictError(f"{cls.__qualname__}: accessor(s) already defined: {existing}")

    for name, function in build_accessors(spec, docstring).items():
        function.__qualname__ = f"{cls.__qualname__}.{name}"
        function.__module__ = cls.__module__
        setattr(function, FORWARDED_MARKER, f"{spec.inner}.{name}")
        setattr(cls, name, function)

    logger.debug(f"Attached {len(names)} accessor(s) to {cls.__qualname__} via '{spec.inner}'")
    return cls


def forwards(inner: str, fields: str) -> Callable[[T], T]:
    """アクセサを付与するクラスデコレータ

    Example:
        @forwards("fi", "fields = [a: int; b: int;]")
        @dataclass
        class A:
            fi: Inner

    Args:
        inner: 委譲先メンバー名
        fields: "fields = [...]" 形式のルールリスト

    Raises:
        GrammarError: 文法に一致しない
        AccessorConflictError: 名前の衝突
    """

    def decorator(cls: T) -> T:
        source = f"<forwards on {cls.__qualname__}>"
        inner_name = check_member_name(inner, "inner member name", source)
        rules = parse_field_list(fields, source=source)
        spec = ForwardSpec(parent=cls.__name__, inner=inner_name, rules=rules, location=source)
        return attach_accessors(cls, spec)

    return decorator
