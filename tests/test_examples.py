"""
Tests for the bundled example data: the example project and templates
must be valid, and each invalid example must fail for its stated reason.
"""

import pytest

from govproto.examples import (
    address,
    application_confirmation,
    build_complex_journey,
    build_example_project,
    build_simple_journey,
    eligibility,
    example_conditions,
    example_data_model,
    example_fields,
    invalid_examples,
    personal_details,
    service_start,
    standard_check_answers,
)
from govproto.navigation import walk_journey
from govproto.page_types import PageType
from govproto.validation import (
    validate_condition,
    validate_data_model,
    validate_field,
    validate_page,
    validate_project,
)


class TestValidExamples:

    def test_example_project(self):
        result = validate_project(build_example_project())
        assert result.success, result.messages

    def test_fields_and_conditions(self):
        for field in example_fields().values():
            assert validate_field(field).success
        for condition in example_conditions().values():
            assert validate_condition(condition).success

    def test_data_model(self):
        assert validate_data_model(example_data_model()).success

    @pytest.mark.parametrize("build", [build_simple_journey, build_complex_journey])
    def test_journeys(self, build):
        result = validate_project(build())
        assert result.success, result.messages


class TestTemplates:

    def test_template_types(self):
        assert service_start("Apply", "Apply for things.").type == PageType.START
        assert personal_details().type == PageType.QUESTION
        assert address().field_names() == ["addressLine1", "addressLine2", "town", "postcode"]
        assert standard_check_answers().next_page_id == "confirmation"

    def test_templates_are_valid(self):
        for page in (
            service_start("Apply", "Apply for things."),
            personal_details(),
            address(),
            eligibility("Are you over 18?"),
            standard_check_answers("done"),
            application_confirmation(),
        ):
            assert validate_page(page).success

    def test_eligibility_options(self):
        page = eligibility("Are you over 18?", yes_text="Yes, I am", no_text="No, I am not")
        assert [o.text for o in page.fields[0].options] == ["Yes, I am", "No, I am not"]

    def test_reference_number(self):
        assert "UC123" in application_confirmation("UC123").content
        assert "reference number" not in application_confirmation().content


class TestJourneys:

    def test_simple_journey_walk(self):
        assert [p.key for p in walk_journey(build_simple_journey())] == [
            "start", "personal-details", "check-answers", "confirmation",
        ]

    def test_complex_journey_ineligible(self):
        journey = walk_journey(build_complex_journey(), {"eligible": "no"})
        assert [p.key for p in journey] == ["start", "eligibility", "cannot-apply"]

    def test_complex_journey_eligible(self):
        journey = walk_journey(build_complex_journey(), {"eligible": "yes"})
        assert journey[-1].type == PageType.CONFIRMATION
        assert len(journey) == 8


class TestInvalidExamples:
    """Each invalid example breaks exactly the rule it is named after."""

    def test_project_missing_name(self):
        result = validate_project(invalid_examples()["project_missing_name"])
        assert result.errors[0].path == ["name"]

    @pytest.mark.parametrize("name,code", [
        ("project_duplicate_page_ids", "duplicate_page_id"),
        ("project_duplicate_page_keys", "duplicate_page_key"),
        ("project_invalid_page_reference", "unknown_page_reference"),
    ])
    def test_project_integrity(self, name, code):
        result = validate_project(invalid_examples()[name])
        assert [issue.code for issue in result.errors] == [code]

    def test_field_invalid_name(self):
        result = validate_field(invalid_examples()["field_invalid_name"])
        assert result.errors[0].path == ["name"]

    def test_field_missing_options(self):
        result = validate_field(invalid_examples()["field_missing_options"])
        assert result.messages == ["Options are required for radios, checkboxes, and select fields"]

    def test_page_invalid_key(self):
        result = validate_page(invalid_examples()["page_invalid_key"])
        assert result.errors[0].path == ["key"]

    def test_question_page_without_fields(self):
        result = validate_page(invalid_examples()["question_page_without_fields"])
        assert result.messages == ["Question pages must have at least one field"]
