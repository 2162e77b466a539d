# build_schema.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, List, Optional
from datetime import date


class BuildCreate(BaseModel):
    """A validated submission, before the store assigns id and date."""

    project_name: str = Field(..., alias="projectName")
    builder_name: str = Field(..., alias="builderName")
    school: str
    github_url: Optional[str] = Field(default=None, alias="githubUrl")
    website_url: Optional[str] = Field(default=None, alias="websiteUrl")
    artifact_url: Optional[str] = Field(default=None, alias="artifactUrl")
    video_url: Optional[str] = Field(default=None, alias="videoUrl")
    description: str
    tags: List[str]

    model_config = ConfigDict(populate_by_name=True)


class BuildRecord(BaseModel):
    # Stored records are opaque: no length or link checks on read
    id: str
    project_name: str = Field(..., alias="projectName")
    builder_name: str = Field(..., alias="builderName")
    school: str
    github_url: Optional[str] = Field(default=None, alias="githubUrl")
    website_url: Optional[str] = Field(default=None, alias="websiteUrl")
    artifact_url: Optional[str] = Field(default=None, alias="artifactUrl")
    video_url: Optional[str] = Field(default=None, alias="videoUrl")
    description: str
    tags: List[str] = Field(default=[])
    submitted_at: date = Field(..., alias="submittedAt")
    featured: bool = Field(default=False)

    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> dict:
        """JSON-ready dict in the persisted camelCase shape, absent links omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SubmissionCreated(BaseModel):
    success: bool = True
    id: str


class CatalogRead(BaseModel):
    schools: List[str]
    other_school: str = Field(..., alias="otherSchool")
    tags: List[str]
    tag_colors: Dict[str, str] = Field(..., alias="tagColors")
    card_colors: List[str] = Field(..., alias="cardColors")

    model_config = ConfigDict(populate_by_name=True)
