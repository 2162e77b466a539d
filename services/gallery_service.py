# services/gallery_service.py
import logging
from typing import Iterable, List, Optional, Sequence

from schemas.build_schema import BuildRecord

logger = logging.getLogger(__name__)


def merge_records(
    dynamic_records: Sequence[BuildRecord],
    seed_records: Sequence[BuildRecord],
) -> List[BuildRecord]:
    """Dynamic records first, then seed records whose id is not taken (dynamic wins)."""
    merged = list(dynamic_records)
    seen = {record.id for record in merged}
    for record in seed_records:
        if record.id in seen:
            continue
        merged.append(record)
        seen.add(record.id)
    return merged


def sort_newest_first(records: Iterable[BuildRecord]) -> List[BuildRecord]:
    # sorted() is stable, so same-day records keep merge order
    return sorted(records, key=lambda record: record.submitted_at, reverse=True)


def matches_tags(record: BuildRecord, selected_tags: Sequence[str]) -> bool:
    if not selected_tags:
        return True
    return any(tag in selected_tags for tag in record.tags)


def matches_query(record: BuildRecord, query: Optional[str]) -> bool:
    if not query:
        return True
    needle = query.lower()
    return (
        needle in record.project_name.lower()
        or needle in record.description.lower()
        or needle in record.builder_name.lower()
    )


def build_gallery_view(
    dynamic_records: Sequence[BuildRecord],
    seed_records: Sequence[BuildRecord] = (),
    selected_tags: Optional[Sequence[str]] = None,
    search_query: Optional[str] = None,
) -> List[BuildRecord]:
    """
    Records to display in the gallery: merged, newest first, then filtered.

    A record is kept when it carries any of ``selected_tags`` and its name,
    description or builder contains ``search_query`` (case-insensitive).
    Empty filters keep everything.
    """
    selected_tags = list(selected_tags or [])
    records = sort_newest_first(merge_records(dynamic_records, seed_records))
    view = [
        record for record in records
        if matches_tags(record, selected_tags) and matches_query(record, search_query)
    ]
    logger.debug(f"Gallery view: {len(view)} of {len(records)} builds")
    return view
