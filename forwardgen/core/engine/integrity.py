"""Integrity検証エンジン

仕様（SpecIR）と実装クラスの整合性を検証する。
inner_ref/parent_refで参照されたクラスをインポートし、
転送先フィールド/アクセサの存在と戻り値型を検証する。
"""

from __future__ import annotations

import dataclasses
import importlib
import inspect
import logging
import typing
from typing import Any

from forwardgen.core.base.ir import FORWARDED_MARKER, AccessorMode, ForwardingRule, ForwardSpec, SpecIR

logger = logging.getLogger(__name__)


def import_python_type(type_ref: str) -> type[Any]:
    """Python型参照をインポート

    Args:
        type_ref: "module.path:ClassName"形式の参照

    Returns:
        インポートされた型

    Raises:
        ValueError: 不正なフォーマット
        ImportError: インポート失敗
        AttributeError: クラスが存在しない
    """
    if ":" not in type_ref:
        raise ValueError(f"Invalid type reference format (expected 'module:class'): {type_ref}")

    module_path, class_name = type_ref.rsplit(":", 1)
    module = importlib.import_module(module_path)
    target: Any = module
    for part in class_name.split("."):
        target = getattr(target, part)
    return target


def declared_field_names(cls: type[Any]) -> set[str]:
    """クラスが宣言しているデータフィールド名を収集

    dataclassフィールド、Pydanticのmodel_fields、型アノテーション、__slots__、
    property、呼び出し可能でないクラス属性を対象とする。
    """
    names: set[str] = set()

    if dataclasses.is_dataclass(cls):
        names.update(f.name for f in dataclasses.fields(cls))

    model_fields = getattr(cls, "model_fields", None)
    if isinstance(model_fields, dict):
        names.update(model_fields)

    for klass in cls.__mro__[:-1]:
        names.update(inspect.get_annotations(klass))
        slots = klass.__dict__.get("__slots__", ())
        names.update([slots] if isinstance(slots, str) else slots)
        for name, value in klass.__dict__.items():
            if name.startswith("__") or callable(value) or isinstance(value, (classmethod, staticmethod)):
                continue
            names.add(name)

    return names


def _type_name(hint: Any) -> str:
    """型ヒントを比較用の名前に変換"""
    return getattr(hint, "__name__", None) or str(hint)


def _resolve_hints(target: Any) -> dict[str, Any]:
    """型ヒントを解決（失敗時は空辞書）"""
    try:
        return typing.get_type_hints(target)
    except Exception as exc:
        # 前方参照が解決できない場合などは型検証を省略
        logger.debug(f"Could not resolve type hints for {target!r}: {exc}")
        return {}


class IntegrityValidator:
    """Integrity検証クラス

    SpecIRと実装クラスの整合性を検証する。
    ForwardingRuleごとに転送先の存在・種類・戻り値型を確認する。
    """

    def __init__(self, ir: SpecIR):
        """初期化

        Args:
            ir: SpecIR（正規化済みの中間表現）
        """
        self.ir = ir

    def validate_integrity(self) -> dict[str, list[str]]:
        """全ForwardSpecの整合性を検証

        Returns:
            カテゴリ別エラー辞書 {"parents": [...], "accessors": [...], "types": [...]}
        """
        errors: dict[str, list[str]] = {"parents": [], "accessors": [], "types": []}

        for spec in self.ir.forwards:
            if spec.parent_ref:
                errors["parents"].extend(self._validate_parent(spec))
            if spec.inner_ref:
                accessor_errors, type_errors = self._validate_inner(spec)
                errors["accessors"].extend(accessor_errors)
                errors["types"].extend(type_errors)

        return errors

    def _import(self, type_ref: str, label: str) -> tuple[type[Any] | None, str | None]:
        try:
            return import_python_type(type_ref), None
        except (ValueError, ImportError, AttributeError) as exc:
            return None, f"{label}: cannot import '{type_ref}': {exc}"

    def _validate_parent(self, spec: ForwardSpec) -> list[str]:
        """親型が委譲先メンバーを宣言し、アクセサ名を自前で定義していないことを確認"""
        parent_cls, error = self._import(spec.parent_ref or "", f"Parent '{spec.parent}'")
        if parent_cls is None:
            return [error or ""]

        errors = []
        if spec.inner not in declared_field_names(parent_cls):
            errors.append(f"Parent '{spec.parent}': inner member '{spec.inner}' is not declared on {spec.parent_ref}")

        for rule in spec.rules:
            existing = parent_cls.__dict__.get(rule.name)
            # forwards()/attach_accessorsで付与されたアクセサは対象外
            if existing is None or getattr(existing, FORWARDED_MARKER, None):
                continue
            errors.append(f"Parent '{spec.parent}': accessor '{rule.name}' is already defined on {spec.parent_ref}")
        return errors

    def _validate_inner(self, spec: ForwardSpec) -> tuple[list[str], list[str]]:
        """委譲先型が各ルールの転送先を提供していることを確認"""
        inner_cls, error = self._import(spec.inner_ref or "", f"Parent '{spec.parent}', inner '{spec.inner}'")
        if inner_cls is None:
            return [error or ""], []

        field_names = declared_field_names(inner_cls)
        field_hints = _resolve_hints(inner_cls)

        accessor_errors: list[str] = []
        type_errors: list[str] = []
        for rule in spec.rules:
            label = f"Parent '{spec.parent}', accessor '{rule.name}'"
            if rule.mode is AccessorMode.DIRECT_FIELD:
                if rule.name not in field_names:
                    accessor_errors.append(f"{label}: {spec.inner_ref} has no field '{rule.name}'")
                    continue
                actual = field_hints.get(rule.name)
                prop = inspect.getattr_static(inner_cls, rule.name, None)
                if actual is None and isinstance(prop, property) and prop.fget is not None:
                    actual = _resolve_hints(prop.fget).get("return")
            else:
                method = getattr(inner_cls, rule.name, None)
                if not callable(method):
                    accessor_errors.append(f"{label}: {spec.inner_ref} has no accessor method '{rule.name}()'")
                    continue
                actual = _resolve_hints(method).get("return")

            type_error = self._check_return_type(label, rule, actual)
            if type_error:
                type_errors.append(type_error)

        return accessor_errors, type_errors

    def _check_return_type(self, label: str, rule: ForwardingRule, actual: Any) -> str | None:
        if actual is None:
            return None
        actual_name = _type_name(actual)
        if actual_name != rule.return_type:
            return f"{label}: declared return type '{rule.return_type}' does not match '{actual_name}'"
        return None
