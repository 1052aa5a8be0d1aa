# cv_prefill/core/__init__.py

from .parsing import (
    ALLOWED_EXTENSIONS,
    TextExtractionError,
    UnsupportedFileType,
    extract_text_from_bytes,
    extract_text_from_path,
    has_enough_text,
    is_allowed_file,
)

from .cv_fields import extract_cv_fields
from .schema import ExtractedProfile, PreviousEmployer
