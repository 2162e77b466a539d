# scripts/seed.py

import os
import sys
import argparse
import logging

from dotenv import load_dotenv

# Ensure root path for relative imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import settings
from core.exceptions import StoreError, SubmissionRejected
from services.store_service import BuildStore, build_store, load_seed_records
from services.validation_service import check_submission_body

# ✅ Load environment variables
load_dotenv()
logger = logging.getLogger("seed")


DEMO_SUBMISSIONS = [
    {
        "projectName": "Syllabus Sorter",
        "builderName": "Demo Builder",
        "school": "Stanford University",
        "githubUrl": "github.com/demo-builder/syllabus-sorter",
        "description": "Drops every course syllabus into one calendar, tags deadlines by weight and warns you when two big ones collide.",
        "tags": ["productivity", "automation"],
    },
    {
        "projectName": "Chord Sketchpad",
        "builderName": "Demo Builder",
        "school": "Champlain College",
        "websiteUrl": "chords.example.com",
        "videoUrl": "youtu.be/abc123XYZ",
        "description": "Hum a melody into the microphone and get three chord progressions that fit it, each with a playable preview.",
        "tags": ["creative", "tool"],
    },
]


def seed_demo_builds(store: BuildStore) -> int:
    """Append the demo submissions that are not stored yet. Returns how many were added."""
    store.initialize()
    existing = {build.project_name for build in store.read_all()}

    added = 0
    for body in DEMO_SUBMISSIONS:
        if body["projectName"] in existing:
            continue
        record = store.append(check_submission_body(body))
        print(f"✅ Added demo build {record.id}: {record.project_name}")
        added += 1
    return added


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the showcase store with demo builds.")
    parser.add_argument(
        "--backend",
        choices=["file", "kv"],
        default=settings.STORE_BACKEND,
        help="Store backend to seed (file or kv)",
    )
    args = parser.parse_args()
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    print(f"🌱 Seeding {args.backend} store...")
    try:
        count = seed_demo_builds(build_store(args.backend, load_seed_records(settings.SEED_FILE)))
    except (StoreError, SubmissionRejected) as e:
        print(f"❌ Seeding failed: {e}")
        sys.exit(1)
    print(f"🌱 Seeding complete ({count} new builds).")
