"""Integrity検証・生成モジュールテスト用のモデル"""

from __future__ import annotations

from dataclasses import dataclass

from forwardgen import forwards


@dataclass
class Inner:
    a: int
    b: int


class InnerWithAccessors:
    def __init__(self, a: int, b: int):
        self._a = a
        self._b = b

    def a(self) -> int:
        return self._a

    def b(self) -> int:
        return self._b


@dataclass
class Parent:
    fi: Inner


@dataclass
class AccessorParent:
    fi: InnerWithAccessors


@dataclass
class ParentDefiningA:
    fi: Inner

    def a(self) -> int:
        return 0


@forwards("fi", "fields = [a: int; b: int;]")
@dataclass
class DecoratedParent:
    fi: Inner


class InnerWithProperty:
    def __init__(self, area: int):
        self._area = area

    @property
    def area(self) -> int:
        return self._area
