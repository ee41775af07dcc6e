"""Python アクセサ生成 - コード生成ヘルパー

アクセサ関数・アクセサクラス・ファイルヘッダーの文字列生成を担当。
全ての関数は純関数で、同じ入力に対して同じ文字列を返す。
"""

from __future__ import annotations

from forwardgen.core.base.ir import AccessorMode, ForwardingRule, ForwardSpec


def forward_expression(inner: str, rule: ForwardingRule) -> str:
    """アクセサ本体の式を生成

    Args:
        inner: 委譲先メンバー名
        rule: 転送ルール

    Returns:
        "self.inner.a" または "self.inner.a()"
    """
    expression = f"self.{inner}.{rule.name}"
    if rule.mode is AccessorMode.ACCESSOR_CALL:
        return f"{expression}()"
    return expression


def _escape_docstring(text: str) -> str:
    """docstring内で安全に使えるようにエスケープ"""
    # 末尾の " は閉じクォートと連結されるためエスケープ
    if text.endswith('"'):
        return _escape_docstring(text[:-1]) + '\\"'
    return text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')


def render_docstring(text: str, indent: int) -> list[str]:
    """docstring行を生成（複数行対応）"""
    prefix = " " * indent
    body = _escape_docstring(text.strip()).split("\n")
    if len(body) == 1:
        return [f'{prefix}"""{body[0]}"""']

    lines = [f'{prefix}"""{body[0]}']
    for line in body[1:]:
        lines.append(f"{prefix}{line.strip()}" if line.strip() else "")
    lines.append(f'{prefix}"""')
    return lines


def render_accessor(spec: ForwardSpec, rule: ForwardingRule, indent: int = 4, docstring: bool = True) -> list[str]:
    """アクセサ関数1つ分の行リストを生成

    Args:
        spec: 転送定義（委譲先メンバー名を参照）
        rule: 転送ルール
        indent: defのインデント幅
        docstring: docstringを出力するか

    Returns:
        関数定義の行リスト
    """
    prefix = " " * indent
    expression = forward_expression(spec.inner, rule)

    lines = [f"{prefix}def {rule.name}(self) -> {rule.return_type}:"]
    if docstring:
        lines.extend(render_docstring(rule.description or f"Return ``{expression}``.", indent + 4))
    lines.append(f"{prefix}    return {expression}")
    return lines


def render_accessor_functions(spec: ForwardSpec, indent: int = 4, docstring: bool = True) -> list[str]:
    """ForwardSpecの全ルールを定義順に関数定義として生成

    関数定義の間には空行を1行挟む。
    """
    lines: list[str] = []
    for rule in spec.rules:
        if lines:
            lines.append("")
        lines.extend(render_accessor(spec, rule, indent, docstring))
    return lines


def accessor_class_name(parent: str, class_suffix: str) -> str:
    """アクセサクラス名を生成"""
    return f"{parent}{class_suffix}"


def render_accessor_class(parent: str, specs: list[ForwardSpec], class_suffix: str, docstring: bool = True) -> str:
    """親型1つ分のアクセサクラスを生成

    同じ親型に対する複数のForwardSpecは定義順に連結する。

    Args:
        parent: 親型名
        specs: 親型に対する転送定義リスト
        class_suffix: クラス名のサフィックス
        docstring: docstringを出力するか

    Returns:
        クラス定義の文字列
    """
    lines = [f"class {accessor_class_name(parent, class_suffix)}:"]

    if docstring:
        inners = ", ".join(f"``self.{inner}``" for inner in dict.fromkeys(spec.inner for spec in specs))
        descriptions = [spec.description for spec in specs if spec.description]
        text = f"Read accessors for ``{parent}`` forwarding to {inners}."
        if descriptions:
            text += "\n\n" + "\n".join(descriptions)
        lines.extend(render_docstring(text, 4))
        lines.append("")

    lines.append("    __slots__ = ()")

    for spec in specs:
        functions = render_accessor_functions(spec, indent=4, docstring=docstring)
        if functions:
            lines.append("")
            lines.extend(functions)

    return "\n".join(lines)


def render_all(class_names: list[str]) -> str:
    """__all__定義を生成"""
    if not class_names:
        return "__all__: list[str] = []"
    if len(class_names) == 1:
        return f'__all__ = ["{class_names[0]}"]'
    lines = ["__all__ = ["]
    lines.extend(f'    "{name}",' for name in class_names)
    lines.append("]")
    return "\n".join(lines)


def build_file_content(title: str, sections: list[str], all_definition: str | None = None) -> str:
    """ファイルコンテンツを構築

    Args:
        title: モジュールdocstringの1行目
        sections: コードセクション（クラス定義）のリスト
        all_definition: __all__定義（Noneの場合は出力しない）

    Returns:
        完成したファイルコンテンツ（末尾改行1つ）
    """
    header = [
        f'"""{_escape_docstring(title)}',
        "",
        "このファイルは forwardgen が自動生成しました。直接編集しないでください。",
        '"""',
        "",
        "from __future__ import annotations",
    ]
    parts = ["\n".join(header)]
    if all_definition is not None:
        parts.append(all_definition)
    content = "\n\n".join(parts)
    if sections:
        content += "\n\n\n" + "\n\n\n".join(sections)
    return content + "\n"
