from datetime import date

from schemas.build_schema import BuildRecord

TODAY = date(2025, 2, 1)

DESCRIPTION = (
    "A command-line helper that turns lecture recordings into searchable notes "
    "with timestamps."
)


def make_record(id: str, submitted_at: str, **overrides) -> BuildRecord:
    data = {
        "id": id,
        "projectName": f"Project {id}",
        "builderName": f"Builder {id}",
        "school": "Rice University",
        "githubUrl": f"https://github.com/builder/project-{id}",
        "description": DESCRIPTION,
        "tags": ["tool"],
        "submittedAt": submitted_at,
        "featured": False,
    }
    data.update(overrides)
    return BuildRecord.model_validate(data)
