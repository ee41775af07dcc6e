"""Loaderの単体テスト"""

import json
from pathlib import Path

import pytest

from forwardgen.core.base.exceptions import GrammarError
from forwardgen.core.base.ir import AccessorMode
from forwardgen.core.engine.loader import load_spec, load_spec_data

FIXTURES = Path(__file__).parent / "fixtures"


def test_load_meta():
    """メタデータの読み込み"""
    ir = load_spec(FIXTURES / "shapes_spec.yaml")

    assert ir.meta.name == "shapes"
    assert ir.meta.description == "Shapes forwarding sample"
    assert ir.meta.version == "1"


def test_load_invocation_entries():
    """invocation形式のエントリ"""
    ir = load_spec(FIXTURES / "shapes_spec.yaml")

    assert len(ir.forwards) == 4
    square = ir.forwards[0]
    assert square.parent == "Square"
    assert square.inner == "geometry"
    assert square.description == "Square dimensions"
    assert [rule.name for rule in square.rules] == ["width", "height"]
    assert square.rules[0].return_type == "i32"  # 正規化前はエイリアスのまま
    assert square.location.endswith("shapes_spec.yaml:forwards[0]")

    style = ir.forwards[1]
    assert [rule.mode for rule in style.rules] == [AccessorMode.ACCESSOR_CALL, AccessorMode.ACCESSOR_CALL]


def test_load_structured_entry_with_mixed_modes():
    """構造化形式ではルールごとにmodeを指定できる"""
    ir = load_spec(FIXTURES / "shapes_spec.yaml")

    label = ir.forwards[2]
    assert label.parent == "Label"
    assert label.inner == "text"
    assert [rule.name for rule in label.rules] == ["content", "length"]
    assert label.rules[0].mode is AccessorMode.DIRECT_FIELD
    assert label.rules[1].mode is AccessorMode.ACCESSOR_CALL
    assert label.rules[1].description == "Number of characters."


def test_load_empty_field_list():
    ir = load_spec(FIXTURES / "shapes_spec.yaml")

    marker = ir.forwards[3]
    assert marker.parent == "Marker"
    assert marker.rules == []


def test_load_type_aliases():
    ir = load_spec(FIXTURES / "shapes_spec.yaml")
    assert ir.type_aliases == {"i32": "int"}


def test_load_json_spec(tmp_path, sample_spec_yaml):
    """JSON形式の仕様も読み込める"""
    spec_path = tmp_path / "spec.json"
    spec_path.write_text(json.dumps(sample_spec_yaml), encoding="utf-8")

    ir = load_spec(spec_path)
    assert ir.meta.name == "fake-inheritance"
    assert [spec.parent for spec in ir.forwards] == ["A", "B"]


def test_load_unsupported_suffix(tmp_path):
    spec_path = tmp_path / "spec.txt"
    spec_path.write_text("forwards: []", encoding="utf-8")

    with pytest.raises(ValueError, match="未対応のファイル形式"):
        load_spec(spec_path)


def test_load_grammar_error_reports_entry():
    """文法違反のエントリは位置付きのGrammarError"""
    with pytest.raises(GrammarError) as exc_info:
        load_spec(FIXTURES / "invalid_spec_grammar.yaml")

    assert "forwards[1]" in str(exc_info.value)
    assert "cannot mix" in str(exc_info.value)


def test_load_refs():
    ir = load_spec(FIXTURES / "integrity_spec.yaml")

    assert ir.forwards[0].parent_ref == "forward_models:Parent"
    assert ir.forwards[0].inner_ref == "forward_models:Inner"


def test_load_empty_document(write_spec):
    """forwardsが無い仕様は空のIR"""
    ir = load_spec(write_spec({"meta": {"name": "empty"}}))

    assert ir.meta.name == "empty"
    assert ir.forwards == []


class TestStructuredEntryErrors:
    """構造化形式のエラー検出"""

    def test_unknown_mode(self):
        data = {"forwards": [{"parent": "A", "inner": "fi", "fields": [{"name": "a", "type": "int", "mode": "setter"}]}]}

        with pytest.raises(GrammarError, match="unknown mode 'setter'"):
            load_spec_data(data)

    def test_fields_must_be_list(self):
        data = {"forwards": [{"parent": "A", "inner": "fi", "fields": "[a: int;]"}]}

        with pytest.raises(GrammarError, match="'fields' must be a list"):
            load_spec_data(data)

    def test_missing_parent(self):
        data = {"forwards": [{"inner": "fi", "fields": []}]}

        with pytest.raises(GrammarError, match="'parent' must be a valid identifier"):
            load_spec_data(data)

    def test_invalid_rule_name(self):
        data = {"forwards": [{"parent": "A", "inner": "fi", "fields": [{"name": "not valid", "type": "int"}]}]}

        with pytest.raises(GrammarError) as exc_info:
            load_spec_data(data, source="spec.yaml")

        assert "spec.yaml:forwards[0].fields[0]" in str(exc_info.value)

    def test_entry_must_be_mapping(self):
        with pytest.raises(GrammarError, match="must be a mapping"):
            load_spec_data({"forwards": ["A, fi, fields = []"]})


def test_structured_names_are_normalized():
    data = {"forwards": [{"parent": "A", "inner": "inner", "fields": [{"name": "ﬁ", "type": "int"}]}]}

    ir = load_spec_data(data)
    assert ir.forwards[0].rules[0].name == "fi"


def test_structured_mangled_inner_is_rejected():
    data = {"forwards": [{"parent": "A", "inner": "__inner", "fields": []}]}

    with pytest.raises(GrammarError, match="would be name-mangled"):
        load_spec_data(data)
