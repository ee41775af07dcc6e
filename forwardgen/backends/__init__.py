"""バックエンド層 - IR→成果物生成

IRからコード生成を行う関数群。
py_accessorsはモジュールソースを、py_runtimeは既存クラスへの直接付与を担当する。
"""

from . import py_accessors, py_codegen, py_runtime

__all__ = ["py_accessors", "py_codegen", "py_runtime"]
