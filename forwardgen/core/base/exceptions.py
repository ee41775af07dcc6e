"""forwardgen 例外定義"""

from __future__ import annotations


class ForwardgenError(Exception):
    """forwardgen の基底例外"""

    pass


class GrammarError(ForwardgenError, ValueError):
    """転送定義が文法に一致しない

    Attributes:
        source: 定義元のラベル（ファイルパス、エントリ位置など）
        column: 呼び出し文字列内の位置（1始まり、不明な場合はNone）
    """

    def __init__(self, message: str, source: str = "<invocation>", column: int | None = None):
        self.message = message
        self.source = source
        self.column = column
        location = source if column is None else f"{source}:{column}"
        super().__init__(f"{location}: {message}")


class AccessorConflictError(ForwardgenError):
    """付与しようとしたアクセサが親型の既存属性と衝突する"""

    pass
