# form_schema.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Dict, List, Optional, Tuple

from core.catalog import TAG_VOCABULARY
from core.exceptions import UnknownTagError


class FormState(BaseModel):
    """
    Immutable snapshot of the submission form.

    Every value is kept exactly as typed; trimming and URL normalization
    happen during validation and when the submission is prepared.
    """

    project_name: str = Field(default="", alias="projectName")
    builder_name: str = Field(default="", alias="builderName")
    school: str = ""
    custom_school: str = Field(default="", alias="customSchool")
    github_url: str = Field(default="", alias="githubUrl")
    website_url: str = Field(default="", alias="websiteUrl")
    artifact_url: str = Field(default="", alias="artifactUrl")
    video_url: str = Field(default="", alias="videoUrl")
    description: str = ""
    tags: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator(
        "project_name", "builder_name", "school", "custom_school",
        "github_url", "website_url", "artifact_url", "video_url", "description",
        mode="before",
    )
    @classmethod
    def none_as_empty(cls, v):
        if v is None:
            return ""
        return v

    @field_validator("tags")
    @classmethod
    def tags_from_vocabulary(cls, v):
        selected: List[str] = []
        for tag in v:
            if tag not in TAG_VOCABULARY:
                raise UnknownTagError(tag)
            if tag not in selected:
                selected.append(tag)
        return tuple(selected)


class FormValidation(BaseModel):
    valid: bool
    errors: Dict[str, str] = Field(default={})
    # Short labels for the disabled-submit tooltip, in form order
    blocking_reasons: List[str] = Field(default=[], alias="blockingReasons")

    model_config = ConfigDict(populate_by_name=True)


class FieldValidation(BaseModel):
    field: str
    valid: bool
    error: Optional[str] = None
