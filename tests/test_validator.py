"""Validatorのテスト"""

from pathlib import Path

from forwardgen.core.base.ir import ForwardingRule, ForwardSpec, MetaSpec, SpecIR
from forwardgen.core.engine.loader import load_spec, load_spec_data
from forwardgen.core.engine.normalizer import normalize_ir
from forwardgen.core.engine.validate import validate_ir, validate_spec
from forwardgen.core.engine.validate_formatter import format_validation_result

FIXTURES = Path(__file__).parent / "fixtures"


def test_validate_valid_spec():
    """正常なspecのバリデーションが通るテスト"""
    ir = normalize_ir(load_spec(FIXTURES / "shapes_spec.yaml"))

    errors = validate_ir(ir)
    assert errors == [], f"Expected no errors, but got: {errors}"


def test_validate_duplicate_within_invocation():
    ir = load_spec_data({"forwards": [{"invocation": "A, fi, fields = [a: int; a: int;]"}]})

    errors = validate_ir(ir)
    assert errors == ["Parent 'A': duplicate accessor names: ['a']"]


def test_validate_duplicate_across_entries():
    """同じ親型に対する複数エントリ間の重複も検出"""
    ir = load_spec(FIXTURES / "invalid_spec_duplicate.yaml")

    errors = validate_ir(ir)
    assert any("duplicate accessor names: ['width']" in e for e in errors), errors


def test_validate_same_name_on_different_parents_is_fine():
    ir = load_spec_data(
        {
            "forwards": [
                {"invocation": "A, fi, fields = [a: int;]"},
                {"invocation": "B, fi, fields = [a: int;]"},
            ]
        }
    )

    assert validate_ir(ir) == []


def test_validate_inner_shadowing():
    """アクセサ名が委譲先メンバー名と同じ場合はエラー"""
    ir = load_spec_data({"forwards": [{"invocation": "A, fi, fields = [fi: int;]"}]})

    errors = validate_ir(ir)
    assert len(errors) == 1
    assert "shadowed by inner member 'fi'" in errors[0]


def test_validate_spec_categorizes_grammar_errors():
    result = validate_spec(FIXTURES / "invalid_spec_grammar.yaml")

    assert len(result["errors"]["grammar"]) == 1
    assert "cannot mix" in result["errors"]["grammar"][0]


def test_validate_spec_categorizes_conflicts():
    result = validate_spec(FIXTURES / "invalid_spec_duplicate.yaml")

    assert len(result["errors"]["conflicts"]) == 1
    assert result["successes"]["rules"] == []


def test_validate_spec_empty_field_list_is_warning():
    """空のfield listは警告のみ"""
    result = validate_spec(FIXTURES / "shapes_spec.yaml")

    total_errors = sum(len(msgs) for msgs in result["errors"].values())
    assert total_errors == 0
    assert len(result["warnings"]["rules"]) == 1
    assert "Parent 'Marker'" in result["warnings"]["rules"][0]


def test_format_validation_result():
    result = validate_spec(FIXTURES / "shapes_spec.yaml")

    formatted = format_validation_result(result)
    assert "✅ All validations passed" in formatted
    assert "warning" in formatted
    assert "passed validation" not in formatted

    verbose = format_validation_result(result, verbose=True)
    assert "Parent 'Square': 4 accessor(s) are valid" in verbose


def test_format_validation_result_with_errors():
    result = validate_spec(FIXTURES / "invalid_spec_grammar.yaml")

    formatted = format_validation_result(result)
    assert "❌ Validation failed with 1 error(s)" in formatted
    assert "📐 Grammar (1 error):" in formatted
    assert "All validations passed" not in formatted


def test_validate_duplicate_after_nfkc_normalization():
    """NFKC正規化後に同じ名前になるものは重複"""
    ir = SpecIR(
        meta=MetaSpec(name="nfkc"),
        forwards=[
            ForwardSpec(
                parent="A",
                inner="inner",
                rules=[ForwardingRule(name="fi", return_type="int"), ForwardingRule(name="ﬁ", return_type="int")],
            )
        ],
    )

    assert validate_ir(ir) == ["Parent 'A': duplicate accessor names: ['fi']"]


def test_validate_duplicate_after_nfkc_in_invocation():
    ir = load_spec_data({"forwards": [{"invocation": "A, inner, fields = [fi: int; ﬁ: int;]"}]})

    assert validate_ir(ir) == ["Parent 'A': duplicate accessor names: ['fi']"]


def test_validate_mangled_names():
    """生成クラス内でname manglingされる名前はエラー"""
    ir = SpecIR(
        meta=MetaSpec(name="mangled"),
        forwards=[
            ForwardSpec(
                parent="A",
                inner="__inner",
                rules=[ForwardingRule(name="__a", return_type="int"), ForwardingRule(name="__b__", return_type="int")],
                location="<test>",
            )
        ],
    )

    assert validate_ir(ir) == [
        "Parent 'A': inner member '__inner' would be name-mangled (<test>)",
        "Parent 'A', accessor '__a': would be name-mangled (<test>)",
    ]
