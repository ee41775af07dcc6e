"""Normalizer: IR正規化

メタハンドラRegistryを用いてIRを正規化する。
主な機能:
1. type_aliasesによる戻り値型の置換
2. 拡張可能なメタハンドラRegistry

ハンドラはルールの順序を変更してはならない。
"""

from __future__ import annotations

import logging
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Protocol

from forwardgen.core.base.ir import SpecIR

logger = logging.getLogger(__name__)


class MetaHandler(Protocol):
    """メタハンドラのプロトコル"""

    def __call__(self, ir: SpecIR) -> SpecIR:
        """IRを正規化する

        Args:
            ir: 入力IR

        Returns:
            正規化されたIR
        """
        ...


@dataclass
class MetaHandlerRegistry:
    """メタハンドラのRegistry"""

    handlers: list[MetaHandler] = field(default_factory=list)

    def register(self, handler: MetaHandler) -> None:
        """ハンドラを登録"""
        self.handlers.append(handler)

    def apply_all(self, ir: SpecIR) -> SpecIR:
        """全てのハンドラを適用"""
        result = ir
        for handler in self.handlers:
            result = handler(result)
        return result


# グローバルRegistry
_global_registry = MetaHandlerRegistry()


def register_meta_handler(handler: MetaHandler) -> None:
    """メタハンドラを登録（グローバル）

    Args:
        handler: 登録するハンドラ
    """
    _global_registry.register(handler)


def normalize_ir(ir: SpecIR) -> SpecIR:
    """IRを正規化

    Args:
        ir: 入力IR

    Returns:
        正規化されたIR
    """
    return _global_registry.apply_all(ir)


# ===== Built-in Handlers =====


def type_alias_handler(ir: SpecIR) -> SpecIR:
    """型エイリアスハンドラ

    ForwardingRule.return_typeがtype_aliasesに含まれる場合、対応する型名に置換する。
    置換は1段のみ（エイリアスの連鎖は解決しない）。

    Args:
        ir: 入力IR

    Returns:
        正規化されたIR
    """
    ir_copy = deepcopy(ir)

    if not ir_copy.type_aliases:
        return ir_copy

    for spec in ir_copy.forwards:
        for rule in spec.rules:
            target = ir_copy.type_aliases.get(rule.return_type)
            if target is None:
                continue
            logger.debug(f"{spec.parent}.{rule.name}: return type '{rule.return_type}' -> '{target}'")
            rule.return_type = target

    return ir_copy


# Built-inハンドラを自動登録
register_meta_handler(type_alias_handler)
