# routes/catalog.py
from fastapi import APIRouter

from core.catalog import CARD_COLORS, OTHER_SCHOOL, SCHOOLS, TAG_COLORS, TAGS
from schemas.build_schema import CatalogRead

router = APIRouter(tags=["Catalog"])


# ==================================================================
#  ✅ Schools, tags and colours for the form and the gallery
# ==================================================================
@router.get("", response_model=CatalogRead)
def get_catalog():
    return CatalogRead(
        schools=list(SCHOOLS),
        other_school=OTHER_SCHOOL,
        tags=list(TAGS),
        tag_colors=dict(TAG_COLORS),
        card_colors=list(CARD_COLORS),
    )
