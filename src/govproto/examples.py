"""
Example projects, pages and fields for documentation, demos and tests.

    - build_example_project(): a branching application journey with an
      eligibility question, an interest-driven detour and an exit page
    - page templates: ready-made pages for common GOV.UK patterns
    - build_simple_journey() / build_complex_journey(): journeys assembled
      with the builders
    - invalid_examples(): raw data that each break one rule

Every call returns fresh objects, so callers may mutate them freely.
"""
from typing import Any, Dict, Optional

from govproto.builders import (
    checkbox_input,
    date_input,
    email_input,
    page_builders,
    radio_input,
    select_input,
    text_input,
    textarea_input,
)
from govproto.conditions import Condition, contains, equals
from govproto.fields import FieldOption, FieldType, FormField, ValidationRule
from govproto.page_types import PageType
from govproto.pages import Page
from govproto.project import DataModel, FooterLink, NavigationItem, Phase, Project, ProjectSettings
from govproto.serialization import project_to_dict


# =============================================================================
# FIELDS AND CONDITIONS
# =============================================================================


def example_fields() -> Dict[str, FormField]:
    return {
        "first_name": FormField(
            id="field-first-name",
            name="firstName",
            type=FieldType.TEXT,
            label="First name",
            required=True,
            validation=[
                ValidationRule(type="required", message="Enter your first name"),
                ValidationRule(type="maxLength", value=50, message="First name must be 50 characters or fewer"),
            ],
        ),
        "email": FormField(
            id="field-email",
            name="email",
            type=FieldType.EMAIL,
            label="Email address",
            hint="We'll use this to send you updates",
            required=True,
            validation=[
                ValidationRule(type="required", message="Enter your email address"),
                ValidationRule(type="email", message="Enter a valid email address"),
            ],
        ),
        "eligibility": FormField(
            id="field-eligibility",
            name="eligibility",
            type=FieldType.RADIOS,
            label="Are you eligible for this service?",
            hint="You must be a UK resident",
            required=True,
            options=[
                FieldOption(value="yes", text="Yes, I am eligible"),
                FieldOption(value="no", text="No, I am not eligible"),
                FieldOption(value="unsure", text="I'm not sure", hint="We can help you check"),
            ],
            validation=[ValidationRule(type="required", message="Select whether you are eligible")],
        ),
        "interests": FormField(
            id="field-interests",
            name="interests",
            type=FieldType.CHECKBOXES,
            label="What are you interested in?",
            hint="Select all that apply",
            options=[
                FieldOption(value="healthcare", text="Healthcare services"),
                FieldOption(value="education", text="Education and training"),
                FieldOption(value="employment", text="Employment support"),
                FieldOption(value="housing", text="Housing assistance"),
            ],
        ),
        "description": FormField(
            id="field-description",
            name="description",
            type=FieldType.TEXTAREA,
            label="Tell us more about your situation",
            hint="You can write up to 500 characters",
            validation=[
                ValidationRule(type="maxLength", value=500, message="Description must be 500 characters or fewer"),
            ],
            attributes={"rows": "5"},
        ),
    }


def example_conditions() -> Dict[str, Condition]:
    return {
        "eligible_user": Condition(
            id="condition-eligible",
            expression=equals("eligibility", "yes"),
            to_page_id="page-personal-details",
            description="User is eligible - proceed to personal details",
        ),
        "ineligible_user": Condition(
            id="condition-ineligible",
            expression=equals("eligibility", "no"),
            to_page_id="page-ineligible",
            description="User is not eligible - show ineligible page",
        ),
        "unsure_user": Condition(
            id="condition-unsure",
            expression=equals("eligibility", "unsure"),
            to_page_id="page-eligibility-help",
            description="User is unsure - help them check eligibility",
        ),
        "healthcare_interest": Condition(
            id="condition-healthcare",
            expression=contains("interests", "healthcare"),
            to_page_id="page-healthcare-info",
            description="User interested in healthcare - show healthcare info",
        ),
    }


# =============================================================================
# EXAMPLE PROJECT
# =============================================================================


def example_pages() -> Dict[str, Page]:
    fields = example_fields()
    conditions = example_conditions()

    return {
        "start": Page(
            id="page-start",
            key="start",
            type=PageType.START,
            path="/start",
            title="Apply for government service",
            heading="Apply for government service",
            content=(
                "<p>Use this service to apply for government support.</p>\n"
                "<p>It takes around 10 minutes to complete.</p>\n"
                "<h2>Before you start</h2>\n"
                "<p>You will need:</p>\n"
                "<ul>\n"
                "  <li>your National Insurance number</li>\n"
                "  <li>proof of your identity</li>\n"
                "  <li>bank account details</li>\n"
                "</ul>"
            ),
            next_page_id="page-eligibility",
        ),
        "eligibility": Page(
            id="page-eligibility",
            key="eligibility",
            type=PageType.QUESTION,
            path="/eligibility",
            title="Eligibility check",
            fields=[fields["eligibility"]],
            conditions=[
                conditions["eligible_user"],
                conditions["ineligible_user"],
                conditions["unsure_user"],
            ],
        ),
        "eligibility_help": Page(
            id="page-eligibility-help",
            key="eligibility-help",
            type=PageType.CONTENT,
            path="/eligibility-help",
            title="Check if you are eligible",
            content="<p>You are eligible if you live in the UK and are 18 or over.</p>",
            next_page_id="page-eligibility",
        ),
        "personal_details": Page(
            id="page-personal-details",
            key="personal-details",
            type=PageType.QUESTION,
            path="/personal-details",
            title="Your personal details",
            fields=[fields["first_name"], fields["email"]],
            next_page_id="page-interests",
        ),
        "interests": Page(
            id="page-interests",
            key="interests",
            type=PageType.QUESTION,
            path="/interests",
            title="Your interests",
            fields=[fields["interests"]],
            conditions=[conditions["healthcare_interest"]],
            next_page_id="page-description",
        ),
        "healthcare_info": Page(
            id="page-healthcare-info",
            key="healthcare-info",
            type=PageType.CONTENT,
            path="/healthcare-info",
            title="Healthcare services",
            content="<p>We will send you information about healthcare services in your area.</p>",
            next_page_id="page-description",
        ),
        "description": Page(
            id="page-description",
            key="description",
            type=PageType.QUESTION,
            path="/description",
            title="Additional information",
            fields=[fields["description"]],
            next_page_id="page-check-answers",
        ),
        "check_answers": Page(
            id="page-check-answers",
            key="check-answers",
            type=PageType.CHECK_ANSWERS,
            path="/check-answers",
            title="Check your answers",
            content="Check your answers before submitting your application.",
            next_page_id="page-confirmation",
        ),
        "confirmation": Page(
            id="page-confirmation",
            key="confirmation",
            type=PageType.CONFIRMATION,
            path="/confirmation",
            title="Application submitted",
            heading="Application submitted",
            content=(
                '<div class="govuk-panel govuk-panel--confirmation">\n'
                '  <h1 class="govuk-panel__title">Application complete</h1>\n'
                '  <div class="govuk-panel__body">Your reference number<br><strong>HDJ2123F</strong></div>\n'
                "</div>\n"
                "<p>We have sent you a confirmation email.</p>"
            ),
        ),
        "ineligible": Page(
            id="page-ineligible",
            key="ineligible",
            type=PageType.CONTENT,
            path="/ineligible",
            title="You cannot use this service",
            content=(
                "<p>Based on your answers, you cannot use this service.</p>\n"
                "<h2>What you can do next</h2>\n"
                '<p>You can <a href="/start">start again</a> if you think you made a mistake.</p>'
            ),
        ),
    }


def example_settings() -> ProjectSettings:
    return ProjectSettings(
        govuk_frontend_version="5.11.2",
        service_name="Apply for government service",
        service_url="https://apply-for-service.service.gov.uk",
        phase=Phase.BETA,
        show_phase_banner=True,
        feedback_url="mailto:feedback@service.gov.uk",
        navigation=[
            NavigationItem(text="Home", href="/", active=True),
            NavigationItem(text="Help", href="/help"),
        ],
        footer_links=[
            FooterLink(text="Privacy policy", href="/privacy"),
            FooterLink(text="Cookies", href="/cookies"),
        ],
    )


def build_example_project() -> Project:
    """The branching 'Government Service Application' journey (10 pages)."""
    return Project(
        id="project-example",
        name="Government Service Application",
        description="A simple application form for a government service",
        settings=example_settings(),
        pages=list(example_pages().values()),
    )


def example_data_model() -> DataModel:
    """Answers of an eligible user interested in healthcare and education."""
    return DataModel(
        session_id="session-123",
        answers={
            "eligibility": "yes",
            "firstName": "John",
            "email": "john@example.com",
            "interests": ["healthcare", "education"],
            "description": "I need help with accessing healthcare services in my area.",
        },
        current_page_id="page-check-answers",
        completed_pages=[
            "page-start",
            "page-eligibility",
            "page-personal-details",
            "page-interests",
            "page-healthcare-info",
            "page-description",
        ],
    )


# =============================================================================
# PAGE TEMPLATES
# =============================================================================


def service_start(service_name: str, description: str) -> Page:
    return page_builders.start(
        title=service_name,
        content=(
            f"<p>{description}</p>\n"
            "<p>It takes around 10 minutes to complete.</p>\n"
            "<h2>Before you start</h2>\n"
            "<p>You will need:</p>\n"
            "<ul>\n"
            "  <li>your National Insurance number</li>\n"
            "  <li>proof of your identity</li>\n"
            "  <li>bank account details</li>\n"
            "</ul>"
        ),
    )


def personal_details() -> Page:
    return page_builders.question(
        title="Your personal details",
        fields=[
            text_input("firstName", "First name", required=True,
                       validation=[{"type": "required", "message": "Enter your first name"}]),
            text_input("lastName", "Last name", required=True,
                       validation=[{"type": "required", "message": "Enter your last name"}]),
            email_input("email", "Email address", required=True, hint="We'll use this to send you updates",
                        validation=[{"type": "required", "message": "Enter your email address"}]),
        ],
    )


def address() -> Page:
    return page_builders.question(
        title="Your address",
        fields=[
            text_input("addressLine1", "Address line 1", required=True,
                       validation=[{"type": "required", "message": "Enter your address"}]),
            text_input("addressLine2", "Address line 2 (optional)"),
            text_input("town", "Town or city", required=True,
                       validation=[{"type": "required", "message": "Enter your town or city"}]),
            text_input("postcode", "Postcode", required=True,
                       validation=[{"type": "required", "message": "Enter your postcode"}]),
        ],
    )


def eligibility(question: str, yes_text: str = "Yes", no_text: str = "No") -> Page:
    return page_builders.question(
        title="Eligibility check",
        fields=[
            radio_input(
                "eligibility",
                question,
                [{"value": "yes", "text": yes_text}, {"value": "no", "text": no_text}],
                required=True,
                validation=[{"type": "required", "message": "Select an option"}],
            )
        ],
    )


def standard_check_answers(next_page_id: str = "confirmation") -> Page:
    return page_builders.check_answers(
        title="Check your answers",
        content="Check your answers before submitting your application.",
        next_page_id=next_page_id,
    )


def application_confirmation(reference_number: Optional[str] = None) -> Page:
    body = ""
    if reference_number:
        body = f'  <div class="govuk-panel__body">Your reference number<br><strong>{reference_number}</strong></div>\n'
    return page_builders.confirmation(
        title="Application submitted",
        heading="Application submitted",
        content=(
            '<div class="govuk-panel govuk-panel--confirmation">\n'
            '  <h1 class="govuk-panel__title">Application complete</h1>\n'
            f"{body}"
            "</div>\n"
            "<p>We have sent you a confirmation email.</p>\n"
            "<h2>What happens next</h2>\n"
            "<p>We will review your application and contact you within 5 working days.</p>"
        ),
    )


# =============================================================================
# JOURNEYS
# =============================================================================


def _journey_settings(service_name: str) -> ProjectSettings:
    return ProjectSettings(govuk_frontend_version="5.11.2", service_name=service_name)


def build_simple_journey() -> Project:
    """Linear journey: start -> personal details -> check answers -> confirmation."""
    confirmation = page_builders.confirmation(
        key="confirmation",
        title="Application submitted",
        content="<p>We will contact you within 5 working days.</p>",
    )
    check_answers = page_builders.check_answers(
        key="check-answers",
        title="Check your answers",
        next_page_id=confirmation.id,
    )
    details = page_builders.question(
        key="personal-details",
        title="Your personal details",
        fields=[
            text_input("firstName", "First name", required=True),
            text_input("lastName", "Last name", required=True),
            date_input("dateOfBirth", "Date of birth", required=True),
        ],
        next_page_id=check_answers.id,
    )
    start = page_builders.start(
        key="start",
        title="Apply for a blue badge",
        content=(
            "<p>A blue badge lets you park closer to your destination if you have "
            "a disability or health condition.</p>\n"
            "<p>It takes around 10 minutes to apply.</p>"
        ),
        next_page_id=details.id,
    )
    return Project(
        id="project-blue-badge",
        name="Apply for a blue badge",
        settings=_journey_settings("Apply for a blue badge"),
        pages=[start, details, check_answers, confirmation],
    )


def build_complex_journey() -> Project:
    """
    Branching journey: an eligibility question routes ineligible users to an
    exit page; everyone else continues through details, address and a task
    list to check answers and confirmation.
    """
    confirmation = application_confirmation("UC123456789")
    check_answers = standard_check_answers(next_page_id=confirmation.id)
    task_list = page_builders.task_list(
        key="task-list",
        title="Your Universal Credit application",
        content="Complete all sections to submit your application.",
        next_page_id=check_answers.id,
    )
    home_address = address()
    home_address.next_page_id = task_list.id
    circumstances = page_builders.question(
        key="circumstances",
        title="About your circumstances",
        fields=[
            radio_input("employmentStatus", "What is your employment status?", [
                {"value": "employed", "text": "Employed"},
                {"value": "self-employed", "text": "Self-employed"},
                {"value": "unemployed", "text": "Unemployed"},
                {"value": "retired", "text": "Retired"},
                {"value": "student", "text": "Student"},
                {"value": "other", "text": "Other"},
            ], required=True),
            select_input("country", "Country of birth", [
                {"value": "uk", "text": "United Kingdom"},
                {"value": "ie", "text": "Ireland"},
                {"value": "other-eu", "text": "Other EU country"},
                {"value": "other", "text": "Other country"},
            ], required=True),
            checkbox_input("contactMethods", "How would you like to be contacted?", [
                {"value": "email", "text": "Email"},
                {"value": "phone", "text": "Phone"},
                {"value": "post", "text": "Post"},
            ], hint="Select all that apply"),
            textarea_input("additionalInfo", "Additional information"),
        ],
        next_page_id=home_address.id,
    )
    details = personal_details()
    details.next_page_id = circumstances.id
    cannot_apply = page_builders.content(
        key="cannot-apply",
        title="You cannot apply for Universal Credit",
        content="<p>You must be between 18 and State Pension age to apply.</p>",
    )
    eligibility_page = page_builders.question(
        key="eligibility",
        title="Check if you can apply",
        fields=[
            radio_input("eligible", "Are you between 18 and State Pension age?", [
                {"value": "yes", "text": "Yes"},
                {"value": "no", "text": "No"},
            ], required=True),
        ],
        conditions=[{
            "expression": equals("eligible", "no"),
            "toPageId": cannot_apply.id,
            "description": "Outside the age range",
        }],
        next_page_id=details.id,
    )
    start = page_builders.start(
        key="start",
        title="Apply for Universal Credit",
        content=(
            "<p>Universal Credit is a payment to help with your living costs.</p>\n"
            "<p>It usually takes around 40 minutes to complete your application.</p>"
        ),
        next_page_id=eligibility_page.id,
    )
    return Project(
        id="project-universal-credit",
        name="Apply for Universal Credit",
        settings=_journey_settings("Apply for Universal Credit"),
        pages=[start, eligibility_page, cannot_apply, details, circumstances,
               home_address, task_list, check_answers, confirmation],
    )


# =============================================================================
# INVALID EXAMPLES
# =============================================================================


def invalid_examples() -> Dict[str, Any]:
    """Raw data that each break one rule, keyed by what is wrong."""
    project = project_to_dict(build_example_project())
    pages = {p["id"]: p for p in project["pages"]}
    start = pages["page-start"]
    ineligible = pages["page-ineligible"]
    fields = {f["name"]: f for p in project["pages"] for f in p.get("fields", [])}

    return {
        "project_missing_name": {**project, "name": ""},
        "project_duplicate_page_ids": {
            **project,
            "pages": project["pages"] + [{**ineligible, "key": "ineligible-copy", "path": "/ineligible-copy"}],
        },
        "project_duplicate_page_keys": {
            **project,
            "pages": project["pages"] + [{**ineligible, "id": "page-ineligible-copy"}],
        },
        "project_invalid_page_reference": {
            **project,
            "pages": [{**start, "nextPageId": "nonexistent-page"}],
        },
        "field_invalid_name": {**fields["firstName"], "name": "123invalid"},
        "field_missing_options": {**fields["eligibility"], "options": []},
        "page_invalid_key": {**start, "key": "Invalid Key!"},
        "question_page_without_fields": {**pages["page-eligibility"], "fields": []},
    }
