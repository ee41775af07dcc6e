"""forwardgen - 転送アクセサ生成ツール

親型が保持する委譲先メンバーのフィールド（またはアクセサ）へ転送する
読み取り専用アクセサを生成する。
"""

from forwardgen.backends.py_accessors import generate_accessor_module, write_accessor_module
from forwardgen.backends.py_runtime import attach_accessors, forwards
from forwardgen.core.base import (
    AccessorConflictError,
    AccessorMode,
    ForwardgenError,
    ForwardingRule,
    ForwardSpec,
    GrammarError,
    MetaSpec,
    SpecIR,
)
from forwardgen.core.engine.config_model import GeneratorConfig, load_config
from forwardgen.core.engine.grammar import parse_field_list, parse_invocation
from forwardgen.core.engine.loader import load_spec, load_spec_data
from forwardgen.core.engine.normalizer import normalize_ir
from forwardgen.core.engine.validate import validate_ir

__version__ = "1.0.0"

__all__ = [
    "AccessorConflictError",
    "AccessorMode",
    "ForwardgenError",
    "ForwardingRule",
    "ForwardSpec",
    "GeneratorConfig",
    "GrammarError",
    "MetaSpec",
    "SpecIR",
    "attach_accessors",
    "forwards",
    "generate_accessor_module",
    "load_config",
    "load_spec",
    "load_spec_data",
    "normalize_ir",
    "parse_field_list",
    "parse_invocation",
    "validate_ir",
    "write_accessor_module",
]
