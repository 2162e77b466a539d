from .build_schema import BuildCreate, BuildRecord, SubmissionCreated, CatalogRead
from .form_schema import FormState, FormValidation, FieldValidation

__all__ = [
    # Builds
    "BuildCreate", "BuildRecord", "SubmissionCreated", "CatalogRead",

    # Form
    "FormState", "FormValidation", "FieldValidation",
]
