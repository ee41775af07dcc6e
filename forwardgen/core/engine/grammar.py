"""Grammar: 呼び出し文字列→ForwardSpec変換

受け付ける文法:

    Invocation   ::= Ident ',' Ident ',' FieldList
    FieldList    ::= 'fields' '=' '[' RuleList ']'
    RuleList     ::= DirectRule* | AccessorRule*
    DirectRule   ::= Ident ':' Ident ';'
    AccessorRule ::= 'f' '(' Ident ')' ':' Ident ';'

1つのFieldList内で2種類のルールを混在させることはできない。
識別子はPythonのコンパイル時と同じくNFKC正規化して扱う。
文法違反は全てGrammarErrorとなり、部分的な結果は返さない。
"""

from __future__ import annotations

import keyword
import re
import unicodedata
from dataclasses import dataclass

from forwardgen.core.base.exceptions import GrammarError
from forwardgen.core.base.ir import AccessorMode, ForwardingRule, ForwardSpec

_TOKEN_RE = re.compile(r"(?P<ident>[^\W\d]\w*)|(?P<punct>[,=\[\]():;])")
_WHITESPACE_RE = re.compile(r"\s*")

_IDENT = "ident"
_PUNCT = "punct"
_EOF = "eof"


@dataclass(frozen=True)
class _Token:
    kind: str
    value: str
    column: int

    def describe(self) -> str:
        if self.kind == _EOF:
            return "end of input"
        return f"'{self.value}'"


def _tokenize(text: str, source: str) -> list[_Token]:
    """入力文字列をトークン列に分割"""
    tokens: list[_Token] = []
    pos = _WHITESPACE_RE.match(text, 0).end()
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise GrammarError(f"unexpected character {text[pos]!r}", source, pos + 1)
        if match.group("ident"):
            tokens.append(_Token(_IDENT, normalize_identifier(match.group(0)), pos + 1))
        else:
            tokens.append(_Token(_PUNCT, match.group(0), pos + 1))
        pos = _WHITESPACE_RE.match(text, match.end()).end()
    tokens.append(_Token(_EOF, "", len(text) + 1))
    return tokens


def normalize_identifier(name: str) -> str:
    """識別子をNFKC正規化（"ﬁ" -> "fi"）"""
    return unicodedata.normalize("NFKC", name)


def is_valid_identifier(name: str) -> bool:
    """Python識別子として有効か（キーワードは不可）"""
    name = normalize_identifier(name)
    return name.isidentifier() and not keyword.iskeyword(name)


def is_mangled_name(name: str) -> bool:
    """クラス本体でname manglingの対象になる名前か（"__x"。"__x__" は対象外）"""
    name = normalize_identifier(name)
    return name.startswith("__") and not name.endswith("__")


def check_member_name(name: str, what: str, source: str, column: int | None = None) -> str:
    """委譲先メンバー名・フィールド名を検査して正規化した名前を返す

    Raises:
        GrammarError: 識別子でない、またはname manglingされる名前
    """
    if not isinstance(name, str) or not is_valid_identifier(name):
        raise GrammarError(f"{what} must be a valid identifier, got {name!r}", source, column)
    name = normalize_identifier(name)
    if is_mangled_name(name):
        raise GrammarError(f"{what} '{name}' would be name-mangled inside a class body", source, column)
    return name


class _Parser:
    """再帰下降パーサ"""

    def __init__(self, text: str, source: str):
        self.source = source
        self.tokens = _tokenize(text, source)
        self.pos = 0

    def current(self) -> _Token:
        return self.tokens[self.pos]

    def peek(self, offset: int = 1) -> _Token:
        return self.tokens[min(self.pos + offset, len(self.tokens) - 1)]

    def advance(self) -> _Token:
        token = self.current()
        if token.kind != _EOF:
            self.pos += 1
        return token

    def error(self, message: str, token: _Token | None = None) -> GrammarError:
        token = token or self.current()
        return GrammarError(message, self.source, token.column)

    def expect(self, value: str) -> _Token:
        token = self.current()
        if token.kind != _PUNCT or token.value != value:
            raise self.error(f"expected '{value}', found {token.describe()}")
        return self.advance()

    def expect_identifier(self, what: str) -> str:
        token = self.current()
        if token.kind != _IDENT:
            raise self.error(f"expected {what}, found {token.describe()}")
        if keyword.iskeyword(token.value):
            raise self.error(f"{what} cannot be the keyword '{token.value}'")
        return self.advance().value

    def expect_member_name(self, what: str) -> str:
        token = self.current()
        name = self.expect_identifier(what)
        return check_member_name(name, what, self.source, token.column)

    def expect_end(self) -> None:
        token = self.current()
        if token.kind != _EOF:
            raise self.error(f"unexpected trailing input {token.describe()}")

    def parse_invocation(self) -> ForwardSpec:
        parent = self.expect_identifier("parent type name")
        self.expect(",")
        inner = self.expect_member_name("inner member name")
        self.expect(",")
        rules = self.parse_field_list()
        self.expect_end()
        return ForwardSpec(parent=parent, inner=inner, rules=rules, location=self.source)

    def parse_field_list(self) -> list[ForwardingRule]:
        token = self.current()
        if token.kind != _IDENT or token.value != "fields":
            raise self.error(f"expected 'fields = [...]', found {token.describe()}")
        self.advance()
        self.expect("=")
        self.expect("[")

        rules: list[ForwardingRule] = []
        mode: AccessorMode | None = None
        while not (self.current().kind == _PUNCT and self.current().value == "]"):
            start = self.current()
            rule = self.parse_rule()
            if mode is None:
                mode = rule.mode
            elif rule.mode is not mode:
                raise self.error("cannot mix 'field: type;' and 'f(field): type;' rules in one field list", start)
            rules.append(rule)

        self.expect("]")
        return rules

    def parse_rule(self) -> ForwardingRule:
        token = self.current()
        is_accessor = (
            token.kind == _IDENT and token.value == "f" and self.peek().kind == _PUNCT and self.peek().value == "("
        )
        if is_accessor:
            self.advance()
            self.expect("(")
            name = self.expect_member_name("field name")
            self.expect(")")
            mode = AccessorMode.ACCESSOR_CALL
        else:
            name = self.expect_member_name("field name")
            mode = AccessorMode.DIRECT_FIELD

        self.expect(":")
        return_type = self.expect_identifier("type name")
        self.expect(";")
        return ForwardingRule(name=name, return_type=return_type, mode=mode)


def parse_invocation(text: str, source: str = "<invocation>") -> ForwardSpec:
    """呼び出し文字列をForwardSpecに変換

    Args:
        text: "Parent, inner, fields = [a: int; b: int;]" 形式の文字列
        source: エラー表示用のラベル

    Returns:
        ForwardSpec: 転送定義

    Raises:
        GrammarError: 文法に一致しない
    """
    return _Parser(text, source).parse_invocation()


def parse_field_list(text: str, source: str = "<fields>") -> list[ForwardingRule]:
    """fields = [...] 部分のみを解析してルールリストを返す

    Raises:
        GrammarError: 文法に一致しない（"fields = [...]" の省略を含む）
    """
    parser = _Parser(text, source)
    rules = parser.parse_field_list()
    parser.expect_end()
    return rules
