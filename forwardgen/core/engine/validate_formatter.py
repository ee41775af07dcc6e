"""Validator: 検証結果のフォーマット

カテゴリ別に分類された検証結果をフォーマットして出力する。
"""

from __future__ import annotations

from forwardgen.core.base.ir import SpecIR


def create_category_dict() -> dict[str, list[str]]:
    """カテゴリ別辞書を作成

    Returns:
        カテゴリ別のメッセージリスト辞書
    """
    return {
        "grammar": [],
        "conflicts": [],
        "shadowing": [],
        "rules": [],
    }


def categorize_error(error: str, errors: dict[str, list[str]]) -> None:
    """エラーメッセージをカテゴリ別に分類

    Args:
        error: エラーメッセージ
        errors: カテゴリ別エラー辞書
    """
    if "duplicate accessor" in error:
        errors["conflicts"].append(error)
    elif "shadowed by inner member" in error:
        errors["shadowing"].append(error)
    else:
        errors["rules"].append(error)


def record_successes(ir: SpecIR, errors: dict[str, list[str]], successes: dict[str, list[str]]) -> None:
    """検証に成功した項目を記録する

    Args:
        ir: 検証対象のIR
        errors: エラー辞書（どの項目にエラーがあるか確認用）
        successes: 成功辞書（ここに成功メッセージを追加）
    """
    all_errors = " ".join([msg for msgs in errors.values() for msg in msgs])

    for parent in ir.parents():
        if f"Parent '{parent}'" in all_errors:
            continue
        count = sum(len(spec.rules) for spec in ir.forwards_for(parent))
        successes["rules"].append(f"Parent '{parent}': {count} accessor(s) are valid")


_CATEGORY_LABELS = {
    "grammar": "📐 Grammar",
    "conflicts": "💥 Accessor Conflicts",
    "shadowing": "🌑 Inner Member Shadowing",
    "rules": "🔗 Forwarding Rules",
}


def _format_message_category(category: str, messages: list[str], message_type: str) -> list[str]:
    """メッセージカテゴリをフォーマット"""
    if not messages:
        return []

    lines = []
    label = _CATEGORY_LABELS.get(category, category)
    count = len(messages)
    suffix = "s" if count > 1 else ""

    if message_type == "passed":
        lines.append(f"{label} ({count} {message_type}):")
    else:
        lines.append(f"{label} ({count} {message_type}{suffix}):")

    for msg in messages:
        lines.append(f"  • {msg}")
    lines.append("")
    return lines


def _format_section(messages_by_category: dict[str, list[str]], title: str, message_type: str) -> list[str]:
    total = sum(len(msgs) for msgs in messages_by_category.values())
    if total == 0:
        return []

    lines = [title.format(total=total)]
    for category, messages in messages_by_category.items():
        lines.extend(_format_message_category(category, messages, message_type))
    return lines


def format_validation_result(result: dict[str, dict[str, list[str]]], verbose: bool = False) -> str:
    """検証結果をフォーマットして文字列に変換

    Args:
        result: validate_spec()の戻り値
        verbose: 詳細表示モード（成功も表示）

    Returns:
        フォーマットされた検証結果の文字列
    """
    lines = []
    lines.extend(_format_section(result["errors"], "\n❌ Validation failed with {total} error(s):\n", "error"))
    lines.extend(_format_section(result["warnings"], "\n⚠️  Found {total} warning(s):\n", "warning"))
    if verbose:
        lines.extend(_format_section(result["successes"], "\n✅ {total} item(s) passed validation:\n", "passed"))

    total_errors = sum(len(msgs) for msgs in result["errors"].values())
    if total_errors == 0:
        lines.append("✅ All validations passed")

    return "\n".join(lines)
