"""forwardgen.core.base: IR（中間表現）と例外定義

純粋なデータ定義（最下層）
"""

from .exceptions import AccessorConflictError, ForwardgenError, GrammarError
from .ir import FORWARDED_MARKER, AccessorMode, ForwardingRule, ForwardSpec, MetaSpec, SpecIR

__all__ = [
    # IR data classes
    "FORWARDED_MARKER",
    "AccessorMode",
    "ForwardingRule",
    "ForwardSpec",
    "MetaSpec",
    "SpecIR",
    # Exceptions
    "AccessorConflictError",
    "ForwardgenError",
    "GrammarError",
]
