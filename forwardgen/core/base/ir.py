"""中間表現（IR）データ構造定義

Spec→IR→バックエンドの一貫性を保つための中間表現。
1つのForwardSpecが1回の呼び出し（Parent, inner, fields = [...]）に対応する。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# 実行時に付与されたアクセサ関数に設定される属性名（値は "inner.name"）
FORWARDED_MARKER = "__forwarded_from__"


class AccessorMode(str, Enum):
    """転送モード

    DIRECT_FIELD: ``self.<inner>.<name>`` を返す
    ACCESSOR_CALL: ``self.<inner>.<name>()`` を返す
    """

    DIRECT_FIELD = "field"
    ACCESSOR_CALL = "accessor"


@dataclass
class ForwardingRule:
    """転送ルール（生成されるアクセサ1つ分）"""

    name: str
    return_type: str
    mode: AccessorMode = AccessorMode.DIRECT_FIELD
    description: str = ""


@dataclass
class ForwardSpec:
    """転送定義

    Attributes:
        parent: アクセサを生成する親型の名前
        inner: 親型が保持する委譲先メンバー名
        rules: 転送ルールリスト（順序を保持）
        description: 説明
        parent_ref: 親型のPython型参照（"pkg.mod:Parent"形式、integrity検証用）
        inner_ref: 委譲先型のPython型参照（"pkg.mod:Inner"形式、integrity検証用）
        location: 定義元の位置（エラー表示用）
    """

    parent: str
    inner: str
    rules: list[ForwardingRule] = field(default_factory=list)
    description: str = ""
    parent_ref: str | None = None
    inner_ref: str | None = None
    location: str = ""


@dataclass
class MetaSpec:
    """メタデータ"""

    name: str
    description: str = ""
    version: str = "1.0"


@dataclass
class SpecIR:
    """統合IR（中間表現）

    Loader→Normalizer→Validator→Backendの各段階で使用される。

    Attributes:
        meta: メタデータ
        forwards: 転送定義リスト（定義順）
        type_aliases: 型名エイリアス（"i32" -> "int" など）
    """

    meta: MetaSpec
    forwards: list[ForwardSpec] = field(default_factory=list)
    type_aliases: dict[str, str] = field(default_factory=dict)

    def parents(self) -> list[str]:
        """親型名を初出順で返す"""
        seen: list[str] = []
        for spec in self.forwards:
            if spec.parent not in seen:
                seen.append(spec.parent)
        return seen

    def forwards_for(self, parent: str) -> list[ForwardSpec]:
        """指定した親型の転送定義を定義順で返す"""
        return [spec for spec in self.forwards if spec.parent == parent]
