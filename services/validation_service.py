# ================================================================
# services/validation_service.py — Submission form rules
# ================================================================
"""
Field and whole-form validation for build submissions.

Every rule returns a ``FieldFailure`` (field key, inline message, tooltip
label) or ``None``. The per-field check, the whole-form error map, the
tooltip reasons and the submit gate are all projections of the same rule
results, so they cannot disagree about which fields are failing.
"""
import logging
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from pydantic import ValidationError

from core.catalog import (
    BUILDER_NAME_MAX,
    DESCRIPTION_MAX,
    DESCRIPTION_MIN,
    OTHER_SCHOOL,
    PROJECT_NAME_MAX,
    SCHOOL_NAME_MAX,
    SCHOOLS,
    TAG_VOCABULARY,
)
from core.exceptions import SubmissionRejected, UnknownTagError
from core.links import LinkCheck, LinkKind, normalize_url, validate_link
from schemas.build_schema import BuildCreate
from schemas.form_schema import FormState, FormValidation

logger = logging.getLogger(__name__)

PROJECT_LINKS = "projectLinks"


class FieldFailure(NamedTuple):
    field: str
    reason: str
    label: str


Rule = Callable[[FormState], Optional[FieldFailure]]


# ================================================================
#  ✅ Text fields
# ================================================================
def _check_project_name(state: FormState) -> Optional[FieldFailure]:
    value = state.project_name.strip()
    if not value:
        return FieldFailure("projectName", "Project name is required", "Project name")
    if len(value) > PROJECT_NAME_MAX:
        return FieldFailure(
            "projectName",
            f"Project name must be {PROJECT_NAME_MAX} characters or less",
            f"Project name ({PROJECT_NAME_MAX} chars max)",
        )
    return None


def _check_builder_name(state: FormState) -> Optional[FieldFailure]:
    value = state.builder_name.strip()
    if not value:
        return FieldFailure("builderName", "Builder name is required", "Builder name")
    if len(value) > BUILDER_NAME_MAX:
        return FieldFailure(
            "builderName",
            f"Builder name must be {BUILDER_NAME_MAX} characters or less",
            f"Builder name ({BUILDER_NAME_MAX} chars max)",
        )
    return None


def _check_school(state: FormState) -> Optional[FieldFailure]:
    if not state.school or state.school not in SCHOOLS:
        return FieldFailure("school", "Please select your school", "School")
    return None


def _check_custom_school(state: FormState) -> Optional[FieldFailure]:
    # Only mandatory while the "Other" sentinel is selected
    if state.school != OTHER_SCHOOL:
        return None
    value = state.custom_school.strip()
    if not value:
        return FieldFailure("customSchool", "Please enter your school name", "Custom school name")
    if len(value) > SCHOOL_NAME_MAX:
        return FieldFailure(
            "customSchool",
            f"School name must be {SCHOOL_NAME_MAX} characters or less",
            f"Custom school name ({SCHOOL_NAME_MAX} chars max)",
        )
    return None


def description_remaining(text: str) -> int:
    """Characters still needed to reach the minimum; negative once past the maximum.

    Surrounding whitespace is trimmed before submission, so it does not count.
    """
    length = len((text or "").strip())
    if length < DESCRIPTION_MIN:
        return DESCRIPTION_MIN - length
    if length > DESCRIPTION_MAX:
        return DESCRIPTION_MAX - length
    return 0


def _check_description(state: FormState) -> Optional[FieldFailure]:
    value = state.description.strip()
    if not value:
        return FieldFailure("description", "Description is required", "Description")
    missing = description_remaining(value)
    if missing > 0:
        noun = "character" if missing == 1 else "characters"
        return FieldFailure(
            "description",
            f"Description must be at least {DESCRIPTION_MIN} characters ({missing} more {noun} needed)",
            f"Description ({DESCRIPTION_MIN}+ chars)",
        )
    if missing < 0:
        return FieldFailure(
            "description",
            f"Description must be {DESCRIPTION_MAX} characters or less",
            f"Description ({DESCRIPTION_MAX} chars max)",
        )
    return None


def _check_tags(state: FormState) -> Optional[FieldFailure]:
    if not state.tags:
        return FieldFailure("tags", "Please select at least one tag", "At least one tag")
    return None


# ================================================================
#  ✅ Links
# ================================================================
def _link_checks(state: FormState) -> Dict[str, LinkCheck]:
    return {
        "githubUrl": validate_link(LinkKind.GITHUB, state.github_url),
        "websiteUrl": validate_link(LinkKind.WEBSITE, state.website_url),
        "artifactUrl": validate_link(LinkKind.ARTIFACT, state.artifact_url),
    }


def _link_rule(field: str, kind: LinkKind, attr: str) -> Rule:
    def rule(state: FormState) -> Optional[FieldFailure]:
        check = validate_link(kind, getattr(state, attr))
        if check.valid:
            return None
        return FieldFailure(field, check.reason, check.label)

    rule.__name__ = f"_check_{attr}"
    return rule


def _check_project_links(state: FormState) -> Optional[FieldFailure]:
    if any(check.present and check.valid for check in _link_checks(state).values()):
        return None
    return FieldFailure(
        PROJECT_LINKS,
        "Please provide at least one project link (GitHub, Website, or Artifact)",
        "At least one project link (GitHub/Website/Artifact)",
    )


# Form order; the tooltip lists failures in this order
FIELD_RULES: Dict[str, Rule] = {
    "projectName": _check_project_name,
    "builderName": _check_builder_name,
    "school": _check_school,
    "customSchool": _check_custom_school,
    "githubUrl": _link_rule("githubUrl", LinkKind.GITHUB, "github_url"),
    "websiteUrl": _link_rule("websiteUrl", LinkKind.WEBSITE, "website_url"),
    "artifactUrl": _link_rule("artifactUrl", LinkKind.ARTIFACT, "artifact_url"),
    PROJECT_LINKS: _check_project_links,
    "videoUrl": _link_rule("videoUrl", LinkKind.VIDEO, "video_url"),
    "description": _check_description,
    "tags": _check_tags,
}


# ================================================================
#  ✅ Public API
# ================================================================
def collect_failures(state: FormState) -> List[FieldFailure]:
    failures = []
    for rule in FIELD_RULES.values():
        failure = rule(state)
        if failure is not None:
            failures.append(failure)
    return failures


def validate_field(state: FormState, field: str) -> Optional[str]:
    """Re-run a single field rule (on blur / on change). Returns the inline message."""
    try:
        rule = FIELD_RULES[field]
    except KeyError:
        raise ValueError(f"Unknown form field: {field}")
    failure = rule(state)
    return failure.reason if failure else None


def validate_form(state: FormState) -> FormValidation:
    failures = collect_failures(state)
    return FormValidation(
        valid=not failures,
        errors={failure.field: failure.reason for failure in failures},
        blocking_reasons=[failure.label for failure in failures],
    )


def submit_enabled(state: FormState) -> bool:
    return not collect_failures(state)


def blocking_reasons(state: FormState) -> List[str]:
    return [failure.label for failure in collect_failures(state)]


def toggle_tag(state: FormState, tag: str) -> FormState:
    """Select ``tag`` or deselect it if already selected; selection order is kept."""
    if tag not in TAG_VOCABULARY:
        logger.warning(f"⚠️ Invalid tag attempted: {tag}")
        raise UnknownTagError(tag)
    if tag in state.tags:
        tags = tuple(t for t in state.tags if t != tag)
    else:
        tags = state.tags + (tag,)
    return state.model_copy(update={"tags": tags})


def to_submission(state: FormState) -> BuildCreate:
    """
    Turn a valid form into the record sent to the store.

    Text is trimmed, "Other" is replaced by the custom school name and only
    the links that were filled in are kept, normalized.
    """
    failures = collect_failures(state)
    if failures:
        first = failures[0]
        raise SubmissionRejected(first.reason, field=first.field)

    school = state.custom_school.strip() if state.school == OTHER_SCHOOL else state.school
    return BuildCreate(
        project_name=state.project_name.strip(),
        builder_name=state.builder_name.strip(),
        school=school,
        github_url=normalize_url(state.github_url) or None,
        website_url=normalize_url(state.website_url) or None,
        artifact_url=normalize_url(state.artifact_url) or None,
        video_url=normalize_url(state.video_url) or None,
        description=state.description.strip(),
        tags=list(state.tags),
    )


# ================================================================
#  ✅ Server-side second check
# ================================================================
_REQUIRED_TEXT = {
    "projectName": "Project name is required",
    "builderName": "Builder name is required",
    "school": "Please select your school",
    "description": "Description is required",
}
_LINK_KEYS = ("githubUrl", "websiteUrl", "artifactUrl", "videoUrl")


def check_submission_body(body: Any) -> BuildCreate:
    """
    Validate a raw POST body again on the server; client checks are never trusted.

    The body carries the resolved school name, so a school outside the catalog
    is checked as the free-text "Other" value.
    """
    if not isinstance(body, dict):
        raise SubmissionRejected("Invalid request body")

    for key, reason in _REQUIRED_TEXT.items():
        value = body.get(key)
        if not isinstance(value, str) or not value.strip():
            raise SubmissionRejected(reason, field=key)

    tags = body.get("tags")
    if not isinstance(tags, list) or len(tags) == 0:
        raise SubmissionRejected("At least one tag is required", field="tags")
    for tag in tags:
        if not isinstance(tag, str) or tag not in TAG_VOCABULARY:
            raise SubmissionRejected(f"Unknown tag: {tag}", field="tags")

    for key in _LINK_KEYS:
        value = body.get(key)
        if value is not None and not isinstance(value, str):
            raise SubmissionRejected("Please enter a valid URL", field=key)

    school = body["school"]
    if school.strip() == OTHER_SCHOOL:
        raise SubmissionRejected("Please enter your school name", field="customSchool")
    in_catalog = school in SCHOOLS and school != OTHER_SCHOOL
    try:
        state = FormState(
            project_name=body["projectName"],
            builder_name=body["builderName"],
            school=school if in_catalog else OTHER_SCHOOL,
            custom_school="" if in_catalog else school,
            github_url=body.get("githubUrl"),
            website_url=body.get("websiteUrl"),
            artifact_url=body.get("artifactUrl"),
            video_url=body.get("videoUrl"),
            description=body["description"],
            tags=tuple(tags),
        )
    except ValidationError:
        raise SubmissionRejected("Invalid request body")

    return to_submission(state)
