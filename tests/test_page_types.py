"""
Tests for the page type registry.

Tests cover:
    - The built-in table (field permissions, content and constraints)
    - Lookups by feature, use case and field type group
    - Building and loading registries from data and YAML
"""

import pytest
import yaml
from pydantic import ValidationError

from govproto.fields import FieldType
from govproto.page_types import (
    DEFAULT_REGISTRY,
    FIELD_TYPE_GROUPS,
    PageType,
    PageTypeRegistry,
    UseCase,
    load_registry,
    validate_page_type_config,
)


class TestBuiltinTable:
    """Test the built-in page type rules."""

    def test_all_six_types_present(self):
        assert len(DEFAULT_REGISTRY) == 6
        assert list(DEFAULT_REGISTRY) == [
            PageType.START,
            PageType.CONTENT,
            PageType.QUESTION,
            PageType.TASK_LIST,
            PageType.CHECK_ANSWERS,
            PageType.CONFIRMATION,
        ]

    def test_only_question_pages_have_fields(self):
        for page_type in PageType:
            assert DEFAULT_REGISTRY.can_have_fields(page_type) == (page_type == PageType.QUESTION)

    def test_question_allows_every_type_but_hidden(self):
        allowed = DEFAULT_REGISTRY.get_allowed_field_types("question")
        assert len(allowed) == 11
        assert FieldType.HIDDEN not in allowed
        assert DEFAULT_REGISTRY.is_field_type_allowed("question", "radios")
        assert not DEFAULT_REGISTRY.is_field_type_allowed("question", "hidden")

    def test_non_question_allows_no_field_types(self):
        assert DEFAULT_REGISTRY.get_allowed_field_types(PageType.START) == []
        assert not DEFAULT_REGISTRY.is_field_type_allowed("content", "text")

    def test_unknown_field_type_not_allowed(self):
        assert DEFAULT_REGISTRY.is_field_type_allowed("question", "colour-picker") is False

    def test_question_constraints(self):
        constraints = DEFAULT_REGISTRY["question"].constraints
        assert constraints.min_fields == 1
        assert constraints.max_fields == 10
        assert constraints.max_content_length == 1000

    @pytest.mark.parametrize("page_type,limit", [
        ("start", 2000),
        ("content", 5000),
        ("question", 1000),
        ("task-list", 1000),
        ("check-answers", 500),
        ("confirmation", 2000),
    ])
    def test_content_limits(self, page_type, limit):
        assert DEFAULT_REGISTRY.get_config(page_type).constraints.max_content_length == limit

    def test_requires_next_page(self):
        assert DEFAULT_REGISTRY["start"].constraints.requires_next_page is True
        assert DEFAULT_REGISTRY["check-answers"].constraints.requires_next_page is True
        assert not DEFAULT_REGISTRY["confirmation"].constraints.requires_next_page

    def test_configs_are_frozen(self):
        with pytest.raises(ValidationError):
            DEFAULT_REGISTRY["question"].can_have_fields = False

    def test_unknown_page_type(self):
        with pytest.raises(KeyError):
            DEFAULT_REGISTRY["bogus"]
        assert "bogus" not in DEFAULT_REGISTRY
        assert "task-list" in DEFAULT_REGISTRY


class TestLookups:
    """Test the feature, use case and group queries."""

    def test_by_feature(self):
        assert DEFAULT_REGISTRY.get_page_types_by_feature("requires_content") == [
            PageType.START, PageType.CONTENT, PageType.CONFIRMATION,
        ]
        assert DEFAULT_REGISTRY.get_page_types_by_feature("canHaveFields") == [PageType.QUESTION]

    def test_by_feature_supports_conditions(self):
        assert DEFAULT_REGISTRY.get_page_types_by_feature("supportsConditions") == [
            PageType.CONTENT, PageType.QUESTION, PageType.TASK_LIST, PageType.CHECK_ANSWERS,
        ]

    def test_unknown_feature(self):
        with pytest.raises(ValueError, match="Unknown page type feature: colour"):
            DEFAULT_REGISTRY.get_page_types_by_feature("colour")

    @pytest.mark.parametrize("use_case,expected", [
        (UseCase.COLLECT_INFO, [PageType.QUESTION]),
        ("show-info", [PageType.START, PageType.CONTENT]),
        ("navigate", [PageType.TASK_LIST]),
        ("confirm", [PageType.CHECK_ANSWERS, PageType.CONFIRMATION]),
    ])
    def test_recommended(self, use_case, expected):
        assert DEFAULT_REGISTRY.get_recommended_page_types(use_case) == expected

    def test_unknown_use_case_returns_every_type(self):
        assert DEFAULT_REGISTRY.get_recommended_page_types("juggle") == list(PageType)

    def test_field_groups_for_question(self):
        assert DEFAULT_REGISTRY.get_allowed_field_groups("question") == [
            "text", "textarea", "date", "choice", "file",
        ]

    def test_field_groups_for_content(self):
        assert DEFAULT_REGISTRY.get_allowed_field_groups("content") == []

    def test_group_table(self):
        assert FIELD_TYPE_GROUPS["hidden"].types == (FieldType.HIDDEN,)
        assert set(FIELD_TYPE_GROUPS) == {"text", "textarea", "date", "choice", "file", "hidden"}


class TestBuildingRegistries:
    """Test from_data, to_data and load_registry."""

    def test_round_trip_through_data(self):
        registry = PageTypeRegistry.from_data(DEFAULT_REGISTRY.to_data())
        assert registry.to_data() == DEFAULT_REGISTRY.to_data()

    def test_from_list(self):
        entries = [{"id": key, **config} for key, config in DEFAULT_REGISTRY.to_data().items()]
        registry = PageTypeRegistry.from_data(entries)
        assert registry.can_have_fields("question")

    def test_missing_types_rejected(self):
        data = DEFAULT_REGISTRY.to_data()
        del data["task-list"]
        with pytest.raises(ValueError, match="missing page types: task-list"):
            PageTypeRegistry.from_data(data)

    def test_duplicate_types_rejected(self):
        configs = list(DEFAULT_REGISTRY.values())
        with pytest.raises(ValueError, match="defined more than once"):
            PageTypeRegistry(configs + [configs[0]])

    def test_load_registry_from_yaml(self, tmp_path):
        data = DEFAULT_REGISTRY.to_data()
        data["question"]["constraints"]["maxFields"] = 2
        path = tmp_path / "page_types.yaml"
        path.write_text(yaml.safe_dump(data))

        registry = load_registry(path)
        assert registry["question"].constraints.max_fields == 2
        assert registry["content"].constraints.max_content_length == 5000

    def test_load_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(ValueError, match="is empty"):
            load_registry(path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_registry(tmp_path / "nope.yaml")

    def test_validate_single_entry(self):
        good = {"id": "content", **DEFAULT_REGISTRY.to_data()["content"]}
        assert validate_page_type_config(good).success

        result = validate_page_type_config({"id": "content", "name": "Content"})
        assert not result.success
        assert ["description"] in [issue.path for issue in result.errors]
