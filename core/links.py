# core/links.py
"""
Link normalization and shape checks for project and video URLs.

URLs are parsed with pydantic's ``AnyUrl`` so that "parses as an absolute URL"
means the same thing here as it does in a browser.
"""
import re
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from core.catalog import (
    ARTIFACT_HOST,
    ARTIFACT_PATH_PREFIX,
    GITHUB_HOSTS,
    VIDEO_HOSTS,
)

_url_adapter = TypeAdapter(AnyUrl)


class LinkKind(str, Enum):
    GITHUB = "github"
    WEBSITE = "website"
    ARTIFACT = "artifact"
    VIDEO = "video"


class LinkProblem(str, Enum):
    INVALID_URL = "invalid_url"
    INVALID_HOST = "invalid_host"
    WRONG_SCHEME = "wrong_scheme"
    INCOMPLETE_PATH = "incomplete_path"
    INVALID_PATH = "invalid_path"


# (kind, problem) -> (inline message, short tooltip label)
_MESSAGES: Dict[Tuple[LinkKind, LinkProblem], Tuple[str, str]] = {
    (LinkKind.GITHUB, LinkProblem.INVALID_URL): (
        "Please enter a valid URL",
        "Valid GitHub URL",
    ),
    (LinkKind.GITHUB, LinkProblem.INVALID_HOST): (
        "Please enter a valid GitHub URL",
        "Valid GitHub URL",
    ),
    (LinkKind.GITHUB, LinkProblem.WRONG_SCHEME): (
        "GitHub URL must use HTTPS",
        "GitHub URL must use HTTPS",
    ),
    (LinkKind.GITHUB, LinkProblem.INCOMPLETE_PATH): (
        "Please enter a complete GitHub repository URL (github.com/username/repo)",
        "Complete GitHub repo URL",
    ),
    (LinkKind.WEBSITE, LinkProblem.INVALID_URL): (
        "Please enter a valid URL",
        "Valid website URL",
    ),
    (LinkKind.ARTIFACT, LinkProblem.INVALID_URL): (
        "Please enter a valid URL",
        "Valid artifact URL",
    ),
    (LinkKind.ARTIFACT, LinkProblem.INVALID_HOST): (
        "Please enter a valid Claude artifact URL (claude.ai)",
        "Valid Claude artifact URL",
    ),
    (LinkKind.ARTIFACT, LinkProblem.INVALID_PATH): (
        "Artifact URL must be in format: claude.ai/artifacts/...",
        "Valid Claude artifact URL",
    ),
    (LinkKind.ARTIFACT, LinkProblem.WRONG_SCHEME): (
        "Artifact URL must use HTTPS",
        "Artifact URL must use HTTPS",
    ),
    (LinkKind.VIDEO, LinkProblem.INVALID_URL): (
        "Please enter a valid URL",
        "Valid video URL",
    ),
    (LinkKind.VIDEO, LinkProblem.INVALID_HOST): (
        "Please enter a valid YouTube or Loom URL",
        "Valid YouTube or Loom URL",
    ),
    (LinkKind.VIDEO, LinkProblem.WRONG_SCHEME): (
        "URL must use HTTP or HTTPS",
        "Valid video URL protocol",
    ),
}


class LinkCheck(BaseModel):
    """Outcome of checking one link field."""

    kind: LinkKind
    value: str = ""  # normalized; empty means "not provided"
    problem: Optional[LinkProblem] = None

    model_config = ConfigDict(frozen=True)

    @property
    def present(self) -> bool:
        return self.value != ""

    @property
    def valid(self) -> bool:
        return self.problem is None

    @property
    def reason(self) -> Optional[str]:
        if self.problem is None:
            return None
        return _MESSAGES[(self.kind, self.problem)][0]

    @property
    def label(self) -> Optional[str]:
        if self.problem is None:
            return None
        return _MESSAGES[(self.kind, self.problem)][1]


class VideoEmbed(BaseModel):
    provider: str  # "youtube" | "loom"
    embed_url: str = Field(alias="embedUrl")

    model_config = ConfigDict(populate_by_name=True)


# ============================================================
# ✅ Normalization
# ============================================================
def normalize_url(raw: Optional[str]) -> str:
    """Trim ``raw`` and prepend ``https://`` when it carries no http(s) scheme."""
    if raw is None:
        return ""
    trimmed = raw.strip()
    if not trimmed:
        return ""
    if not trimmed.lower().startswith(("http://", "https://")):
        return f"https://{trimmed}"
    return trimmed


def _parse(url: str) -> Optional[AnyUrl]:
    try:
        return _url_adapter.validate_python(url)
    except ValidationError:
        return None


# ============================================================
# ✅ Validation
# ============================================================
def _find_problem(kind: LinkKind, url: AnyUrl) -> Optional[LinkProblem]:
    host = (url.host or "").lower()
    scheme = url.scheme
    path = url.path or "/"

    if kind is LinkKind.GITHUB:
        if host not in GITHUB_HOSTS:
            return LinkProblem.INVALID_HOST
        if scheme != "https":
            return LinkProblem.WRONG_SCHEME
        segments = [part for part in path.split("/") if part]
        if len(segments) < 2:
            return LinkProblem.INCOMPLETE_PATH
        return None

    if kind is LinkKind.ARTIFACT:
        if host != ARTIFACT_HOST:
            return LinkProblem.INVALID_HOST
        if not path.startswith(ARTIFACT_PATH_PREFIX):
            return LinkProblem.INVALID_PATH
        if scheme != "https":
            return LinkProblem.WRONG_SCHEME
        return None

    if kind is LinkKind.VIDEO:
        if host not in VIDEO_HOSTS:
            return LinkProblem.INVALID_HOST
        if scheme not in ("http", "https"):
            return LinkProblem.WRONG_SCHEME
        return None

    # Websites only need to parse
    return None


def validate_link(kind: LinkKind, raw: Optional[str]) -> LinkCheck:
    """
    Check that ``raw`` is a link of the shape required by ``kind``.

    Empty input is valid and absent; whether a link is required at all is
    decided by the form rules, not here.
    """
    kind = LinkKind(kind)
    value = normalize_url(raw)
    if not value:
        return LinkCheck(kind=kind)

    url = _parse(value)
    if url is None:
        return LinkCheck(kind=kind, value=value, problem=LinkProblem.INVALID_URL)

    return LinkCheck(kind=kind, value=value, problem=_find_problem(kind, url))


# ============================================================
# 🎬 Video embedding
# ============================================================
_YOUTUBE_PATTERNS = (
    re.compile(r"youtube\.com/watch\?v=([a-zA-Z0-9_-]+)"),
    re.compile(r"youtu\.be/([a-zA-Z0-9_-]+)"),
    re.compile(r"youtube\.com/embed/([a-zA-Z0-9_-]+)"),
)
_LOOM_PATTERN = re.compile(r"loom\.com/share/([a-zA-Z0-9]+)")


def parse_video_url(url: Optional[str]) -> Optional[VideoEmbed]:
    """Return the embeddable player URL for a YouTube or Loom link, if any."""
    if not url:
        return None

    for pattern in _YOUTUBE_PATTERNS:
        match = pattern.search(url)
        if match:
            return VideoEmbed(
                provider="youtube",
                embed_url=f"https://www.youtube.com/embed/{match.group(1)}?autoplay=1&rel=0",
            )

    match = _LOOM_PATTERN.search(url)
    if match:
        return VideoEmbed(
            provider="loom",
            embed_url=f"https://www.loom.com/embed/{match.group(1)}?autoplay=1",
        )

    return None
