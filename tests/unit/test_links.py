import pytest

from core.links import LinkKind, LinkProblem, normalize_url, parse_video_url, validate_link


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("github.com/a/b", "https://github.com/a/b"),
        ("", ""),
        ("   ", ""),
        (None, ""),
        ("https://x.com", "https://x.com"),
        ("http://x.com", "http://x.com"),
        ("  example.org/page  ", "https://example.org/page"),
    ],
)
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


def test_empty_link_is_valid_and_absent():
    check = validate_link(LinkKind.GITHUB, "  ")
    assert check.valid
    assert not check.present
    assert check.reason is None


def test_github_single_segment_is_incomplete():
    check = validate_link(LinkKind.GITHUB, "https://github.com/user")
    assert check.problem is LinkProblem.INCOMPLETE_PATH
    assert check.reason == "Please enter a complete GitHub repository URL (github.com/username/repo)"
    assert check.label == "Complete GitHub repo URL"


def test_github_accepts_www_host_and_missing_scheme():
    assert validate_link(LinkKind.GITHUB, "www.github.com/owner/repo").valid
    assert validate_link(LinkKind.GITHUB, "github.com/owner/repo/tree/main").valid


def test_github_requires_https():
    check = validate_link(LinkKind.GITHUB, "http://github.com/owner/repo")
    assert check.problem is LinkProblem.WRONG_SCHEME
    assert check.reason == "GitHub URL must use HTTPS"


def test_github_rejects_other_hosts():
    check = validate_link(LinkKind.GITHUB, "https://gitlab.com/owner/repo")
    assert check.problem is LinkProblem.INVALID_HOST
    assert check.reason == "Please enter a valid GitHub URL"


def test_unparsable_url_gets_generic_reason():
    check = validate_link(LinkKind.WEBSITE, "not a url")
    assert check.problem is LinkProblem.INVALID_URL
    assert check.reason == "Please enter a valid URL"
    assert check.label == "Valid website URL"


def test_website_only_needs_to_parse():
    assert validate_link(LinkKind.WEBSITE, "my-project.example.dev").valid


def test_artifact_link():
    assert validate_link(LinkKind.ARTIFACT, "https://claude.ai/artifacts/abc").valid
    assert validate_link(LinkKind.ARTIFACT, "claude.ai/artifacts/abc").valid

    assert validate_link(LinkKind.ARTIFACT, "https://example.com/artifacts/abc").problem is LinkProblem.INVALID_HOST
    assert validate_link(LinkKind.ARTIFACT, "https://claude.ai/chat/abc").problem is LinkProblem.INVALID_PATH
    assert validate_link(LinkKind.ARTIFACT, "http://claude.ai/artifacts/abc").problem is LinkProblem.WRONG_SCHEME


@pytest.mark.parametrize(
    "url",
    [
        "https://www.youtube.com/watch?v=abc",
        "youtube.com/watch?v=abc",
        "https://youtu.be/abc",
        "http://www.loom.com/share/abc",
        "loom.com/share/abc",
    ],
)
def test_video_hosts_allowed(url):
    assert validate_link(LinkKind.VIDEO, url).valid


def test_video_rejects_other_hosts():
    check = validate_link(LinkKind.VIDEO, "https://vimeo.com/123")
    assert check.problem is LinkProblem.INVALID_HOST
    assert check.reason == "Please enter a valid YouTube or Loom URL"


def test_kind_accepts_plain_string():
    assert validate_link("github", "github.com/a/b").valid


def test_parse_video_url():
    youtube = parse_video_url("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
    assert youtube.provider == "youtube"
    assert youtube.embed_url == "https://www.youtube.com/embed/dQw4w9WgXcQ?autoplay=1&rel=0"

    short = parse_video_url("https://youtu.be/dQw4w9WgXcQ")
    assert short.embed_url.startswith("https://www.youtube.com/embed/dQw4w9WgXcQ")

    loom = parse_video_url("https://www.loom.com/share/4f1c2b9a7d")
    assert loom.provider == "loom"
    assert loom.embed_url == "https://www.loom.com/embed/4f1c2b9a7d?autoplay=1"

    assert parse_video_url("https://vimeo.com/123") is None
    assert parse_video_url(None) is None
