# routes/submissions.py
from fastapi import APIRouter, HTTPException, Depends, status, Query, Body
from typing import Any, List, Optional
import logging

from core.exceptions import StoreReadError, StoreWriteError, SubmissionRejected, UnknownTagError
from core.links import VideoEmbed, parse_video_url
from schemas.build_schema import BuildRecord, SubmissionCreated
from schemas.form_schema import FormState, FormValidation, FieldValidation
from services.gallery_service import build_gallery_view
from services.store_service import BuildStore, get_store
from services.validation_service import check_submission_body, validate_field, validate_form

router = APIRouter(tags=["Submissions"])
logger = logging.getLogger(__name__)


def _load_gallery(store: BuildStore, tags: List[str], q: Optional[str]) -> List[BuildRecord]:
    try:
        dynamic = store.read_all()
    except StoreReadError as e:
        logger.error(f"❌ Error fetching builds: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch builds",
        )
    return build_gallery_view(dynamic, store.seed_records, tags, q)


# ==================================================================
#  ✅ List builds (merged, newest first, filtered)
# ==================================================================
@router.get("", response_model=List[BuildRecord], response_model_exclude_none=True)
def list_submissions(
    tags: List[str] = Query(default=[]),
    q: Optional[str] = Query(default=None, max_length=200),
    store: BuildStore = Depends(get_store),
):
    return _load_gallery(store, tags, q)


# ==================================================================
#  ✅ Submit a new build
# ==================================================================
@router.post("", response_model=SubmissionCreated, status_code=status.HTTP_201_CREATED)
def create_submission(
    payload: Any = Body(default=None),
    store: BuildStore = Depends(get_store),
):
    # Client-side validation is never trusted
    try:
        build = check_submission_body(payload)
        record = store.append(build)
    except SubmissionRejected as e:
        logger.warning(f"⚠️ Submission rejected: {e.reason}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.reason)
    except UnknownTagError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (StoreReadError, StoreWriteError) as e:
        logger.error(f"❌ Submission error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Submission failed",
        )

    return SubmissionCreated(id=record.id)


# ==================================================================
#  ✅ Form validation (submit gating and on-blur feedback)
# ==================================================================
@router.post("/validate", response_model=FormValidation)
def validate_submission_form(state: FormState):
    return validate_form(state)


@router.post("/validate/{field}", response_model=FieldValidation)
def validate_submission_field(field: str, state: FormState):
    try:
        error = validate_field(state, field)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return FieldValidation(field=field, valid=error is None, error=error)


# ==================================================================
#  ✅ Embeddable video for a build
# ==================================================================
@router.get("/{build_id}/video", response_model=VideoEmbed)
def get_submission_video(build_id: str, store: BuildStore = Depends(get_store)):
    record = next((b for b in _load_gallery(store, [], None) if b.id == build_id), None)
    if not record:
        raise HTTPException(status_code=404, detail="Build not found")

    embed = parse_video_url(record.video_url)
    if not embed:
        raise HTTPException(status_code=404, detail="No embeddable video for this build")
    return embed
