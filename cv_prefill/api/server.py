# cv_prefill/api/server.py

import os
import traceback
import uuid
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from cv_prefill.core.cv_fields import extract_cv_fields
from cv_prefill.core.logger import get_logger
from cv_prefill.core.parsing import (
    TextExtractionError,
    extract_text_from_path,
    has_enough_text,
    is_allowed_file,
)

logger = get_logger(__name__)

# --------------------------------------------------
# ENV
# --------------------------------------------------
if os.getenv("ENV") != "production":
    load_dotenv()

UPLOAD_DIR = Path(
    os.getenv("CV_UPLOAD_DIR")
    or Path(__file__).resolve().parents[2] / "uploads" / "temp"
)
MAX_CV_BYTES = int(os.getenv("MAX_CV_BYTES", str(5 * 1024 * 1024)))
MIN_CV_TEXT_CHARS = int(os.getenv("MIN_CV_TEXT_CHARS", "50"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
SHOW_ERROR_DETAILS = os.getenv("ENV") == "development"

# --------------------------------------------------
# APP
# --------------------------------------------------
app = FastAPI(title="CV Pre-fill Server")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --------------------------------------------------
# TEMP FILES
# --------------------------------------------------
def _temp_upload_path(suffix: str) -> Path:
    UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    return UPLOAD_DIR / f"cv-{uuid.uuid4().hex}{suffix}"


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.exception("Error deleting temp CV file %s", path)


def _reject_oversized() -> None:
    raise HTTPException(
        status_code=413,
        detail=f"CV file exceeds the {MAX_CV_BYTES // (1024 * 1024)}MB limit",
    )


def _error_detail(exc: Exception) -> dict:
    detail = {"message": "Failed to parse CV", "error": str(exc)}
    if SHOW_ERROR_DETAILS:
        detail["details"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    return detail


# --------------------------------------------------
# ROUTES
# --------------------------------------------------
@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/api/questionnaire/parse-cv")
def parse_cv(cv: Optional[UploadFile] = File(None)):
    """
    Upload one CV (pdf/docx/doc/txt) as multipart field "cv".

    Returns:
      - success, message
      - data: questionnaire pre-fill guessed from the CV
    """
    if cv is None or not cv.filename:
        raise HTTPException(status_code=400, detail="No CV file uploaded")
    if not is_allowed_file(cv.filename):
        raise HTTPException(
            status_code=400,
            detail="Only PDF, DOCX, DOC, and TXT files are allowed",
        )

    if cv.size is not None and cv.size > MAX_CV_BYTES:
        _reject_oversized()
    # size can be missing; never read more than one byte past the limit
    content = cv.file.read(MAX_CV_BYTES + 1)
    if len(content) > MAX_CV_BYTES:
        _reject_oversized()

    temp_path = _temp_upload_path(Path(cv.filename).suffix.lower())
    try:
        temp_path.write_bytes(content)
        text = extract_text_from_path(temp_path)
        if not has_enough_text(text, MIN_CV_TEXT_CHARS):
            logger.warning("Too little text in %s (%d chars)", cv.filename, len(text or ""))
            raise HTTPException(
                status_code=400,
                detail="Could not extract text from CV. Please check the file.",
            )
        profile = extract_cv_fields(text)
    except (TextExtractionError, OSError) as e:
        logger.exception("CV parsing failed for %s (%d bytes)", cv.filename, len(content))
        raise HTTPException(status_code=500, detail=_error_detail(e)) from e
    finally:
        _discard(temp_path)

    logger.info("Parsed CV %s", cv.filename)
    return {
        "success": True,
        "message": "CV parsed successfully",
        "data": profile.model_dump(by_alias=True),
    }
