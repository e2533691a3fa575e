"""
Tests for JSON / YAML serialization of projects and pages.

Round trips must preserve the project exactly; the stored shape uses the
camelCase keys of the persistence layer and omits unset values.
"""

import json

import pytest
import yaml
from pydantic import ValidationError

from govproto.examples import build_complex_journey, build_example_project
from govproto.serialization import (
    page_from_dict,
    page_to_dict,
    project_from_dict,
    project_from_json,
    project_from_yaml,
    project_to_dict,
    project_to_json,
    project_to_yaml,
)

from factories import make_field, make_page, registry_with


class TestStoredShape:

    def test_camel_case_keys(self):
        data = project_to_dict(build_example_project())
        assert data["schemaVersion"] == "1.0.0"
        assert "createdAt" in data
        assert data["settings"]["serviceName"]
        assert data["pages"][0]["nextPageId"] == "page-eligibility"
        assert "toPageId" in data["pages"][1]["conditions"][0]

    def test_unset_values_omitted(self):
        page = page_to_dict(build_example_project().pages[0])
        assert "fields" not in page
        assert "conditions" not in page
        assert "heading" not in page

    def test_enums_and_timestamps_are_plain(self):
        data = project_to_dict(build_example_project())
        assert data["pages"][0]["type"] == "start"
        assert isinstance(data["createdAt"], str)
        json.dumps(data)


class TestRoundTrips:

    @pytest.mark.parametrize("build", [build_example_project, build_complex_journey])
    def test_json(self, build):
        project = build()
        restored = project_from_json(project_to_json(project))
        assert project_to_dict(restored) == project_to_dict(project)
        assert restored.created_at == project.created_at

    @pytest.mark.parametrize("build", [build_example_project, build_complex_journey])
    def test_yaml(self, build):
        project = build()
        restored = project_from_yaml(project_to_yaml(project))
        assert project_to_dict(restored) == project_to_dict(project)

    def test_dict(self):
        project = build_example_project()
        assert project_to_dict(project_from_dict(project_to_dict(project))) == project_to_dict(project)

    def test_page(self):
        page = build_example_project().pages[1]
        assert page_to_dict(page_from_dict(page_to_dict(page))) == page_to_dict(page)

    def test_json_indent(self):
        text = project_to_json(build_example_project(), indent=2)
        assert text.startswith("{\n  ")

    def test_yaml_keeps_key_order(self):
        text = project_to_yaml(build_example_project())
        assert text.index("id:") < text.index("name:") < text.index("pages:")
        assert yaml.safe_load(text)["id"] == "project-example"


class TestLoading:

    def test_bad_shape_raises(self):
        with pytest.raises(ValidationError):
            project_from_json('{"id": "p1", "name": "No pages"}')

    def test_loading_does_not_check_integrity(self):
        data = project_to_dict(build_example_project())
        data["pages"][0]["nextPageId"] = "ghost"
        assert project_from_dict(data).pages[0].next_page_id == "ghost"

    def test_registry_applies(self):
        page = make_page("q", "question", fields=[make_field("a"), make_field("b")])
        assert page_from_dict(page).key == "q"
        with pytest.raises(ValidationError):
            page_from_dict(page, registry=registry_with("question", maxFields=1))
