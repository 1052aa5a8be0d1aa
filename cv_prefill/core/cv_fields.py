# cv_prefill/core/cv_fields.py
from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from .logger import get_logger
from .schema import ExtractedProfile, PreviousEmployer

logger = get_logger(__name__)

# ============================================================
# CONFIG: keyword + city lists (tune freely, order matters)
# ============================================================

TITLE_KEYWORDS: Tuple[str, ...] = (
    "developer", "engineer", "manager", "designer", "analyst", "consultant",
    "specialist", "director", "coordinator", "administrator", "officer",
    "accountant", "programmer", "architect", "technician", "assistant",
    "lead", "senior", "junior", "principal", "chief", "head", "vp", "president",
)

SA_CITIES: Tuple[str, ...] = (
    "Johannesburg", "Cape Town", "Durban", "Pretoria", "Port Elizabeth",
    "Bloemfontein", "Pietermaritzburg", "East London", "Kimberley",
    "Polokwane", "Nelspruit", "Rustenburg",
)

SUMMARY_KEYWORDS = ("summary", "profile", "objective", "about", "introduction", "overview")
SUMMARY_SKIP_KEYWORDS = (
    "personal profile", "personal information", "personal details",
    "father name", "cnic", "date of birth",
)
SUMMARY_END_KEYWORDS = (
    "experience", "employment", "education", "skills", "work history",
    "personal profile", "personal information",
)
PERSONAL_DETAIL_TERMS = (
    "father name", "date of birth", "cnic", "nationality", "religion", "marital status",
)

EXPERIENCE_KEYWORDS = ("experience", "employment", "work history", "professional background", "career")
EXPERIENCE_END_KEYWORDS = ("education", "skills", "references", "certification", "languages", "hobbies")

SKILLS_KEYWORDS = ("skills", "technical skills", "competencies", "expertise")
SKILLS_END_KEYWORDS = ("experience", "education", "references", "certification", "languages")

EDUCATION_KEYWORDS = ("education", "qualification", "academic", "degree", "university", "college")
EDUCATION_END_KEYWORDS = ("experience", "skills", "references", "certification", "languages", "hobbies")

HEADING_MAX_LEN = 50
NAME_SCAN_LINES = 5
TITLE_SCAN_LINES = 15
TITLE_SKIP_LEN = 100
TITLE_MAX_LEN = 80
SUMMARY_MAX_LINES = 10
SUMMARY_MIN_LINE_LEN = 10
SUMMARY_MAX_CHARS = 500
EXPERIENCE_MAX_LINES = 20
SKILLS_MAX_LINES = 10
EDUCATION_MAX_LINES = 10
MAX_EMPLOYERS = 3

# ============================================================
# PATTERNS
# ============================================================

EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
# one line only: [ \t] instead of \s everywhere below
PHONE_RE = re.compile(r"\+?[\d \t\-()]{10,20}")
NAME_TOKEN_RE = re.compile(r"[A-Za-z]{2,}")

CITY_PATTERNS = (
    re.compile(r"\b(?:City|Location|Address|Based in):?[ \t]*([A-Za-z][A-Za-z \t]*)", re.I),
    re.compile(r",[ \t]*([A-Za-z][A-Za-z \t]{2,19}),"),
    re.compile(r"\b(" + "|".join(re.escape(c) for c in SA_CITIES) + r")\b", re.I),
)

DOB_PATTERNS = (
    re.compile(r"\b(?:Date of Birth|DOB|Born):?[ \t]*(\d{1,2}[-/]\d{1,2}[-/]\d{2,4})", re.I),
    re.compile(r"\b(?:Date of Birth|DOB|Born):?[ \t]*(\d{1,2}[ \t]+[A-Za-z]+[ \t]+\d{4})", re.I),
)
NATIONALITY_RE = re.compile(r"\bNationality:?[ \t]*([A-Za-z]+)", re.I)
MARITAL_RE = re.compile(r"\bMarital Status:?[ \t]*([A-Za-z]+)", re.I)

SALARY_RE = re.compile(r"(?:salary|expected|compensation|package)[ \t:]*R?[ \t]*(\d[\d,]*)", re.I)

EMPLOYER_PATTERNS = (
    re.compile(r"(?:\bat|@)[ \t]+([A-Z][A-Za-z \t&]+(?:Ltd|Inc|Corp|Company|Pty)?)"),
    re.compile(r"\b(?:Company|Employer):?[ \t]+([A-Za-z \t&]+)", re.I),
)

# ============================================================
# HELPERS
# ============================================================

def split_lines(text: str) -> List[str]:
    return [l.strip() for l in (text or "").splitlines() if l.strip()]


def _is_contact_line(line: str) -> bool:
    return bool(EMAIL_RE.search(line) or PHONE_RE.search(line))


def _is_heading(line: str, keywords: Sequence[str]) -> bool:
    if len(line) >= HEADING_MAX_LEN:
        return False
    low = line.lower()
    return any(k in low for k in keywords)


def _contains_any(line: str, terms: Sequence[str]) -> bool:
    low = line.lower()
    return any(t in low for t in terms)


def _find_section_start(
    lines: Sequence[str],
    keywords: Sequence[str],
    skip: Sequence[str] = (),
) -> Optional[int]:
    """Index of the line after the first heading matching keywords, or None."""
    for i, line in enumerate(lines):
        if skip and _contains_any(line, skip):
            continue
        if _is_heading(line, keywords):
            return i + 1
    return None


def _section_block(
    lines: Sequence[str],
    keywords: Sequence[str],
    end_keywords: Sequence[str],
    max_lines: int,
    skip: Sequence[str] = (),
) -> List[str]:
    start = _find_section_start(lines, keywords, skip)
    if start is None:
        return []

    block: List[str] = []
    for line in lines[start:start + max_lines]:
        if _is_heading(line, end_keywords):
            break
        block.append(line)
    return block


def _first_group(patterns: Sequence[re.Pattern], text: str) -> str:
    for pattern in patterns:
        m = pattern.search(text)
        if m and m.group(1).strip():
            return m.group(1).strip()
    return ""

# ============================================================
# CONTACTS
# ============================================================

def extract_email(text: str) -> str:
    m = EMAIL_RE.search(text or "")
    return m.group(0) if m else ""


def extract_phone(text: str) -> str:
    for m in PHONE_RE.finditer(text or ""):
        candidate = m.group(0)
        if len(re.sub(r"\D", "", candidate)) >= 10:
            return candidate.strip()
    return ""

# ============================================================
# NAME + HEADLINE
# ============================================================

def extract_name(lines: Sequence[str]) -> Tuple[str, str]:
    """
    First plausible "Firstname Lastname" line near the top:
    - only the first 5 lines are considered
    - contact lines and lines outside 4..49 chars are skipped
    - tokens must be 2+ ASCII letters; at least two are needed
    """
    for line in lines[:NAME_SCAN_LINES]:
        if _is_contact_line(line) or not (3 < len(line) < HEADING_MAX_LEN):
            continue
        parts = [p for p in line.split(" ") if NAME_TOKEN_RE.fullmatch(p)]
        if len(parts) >= 2:
            return parts[0], " ".join(parts[1:])
    return "", ""


def extract_job_title(lines: Sequence[str]) -> str:
    for line in lines[:TITLE_SCAN_LINES]:
        if _is_contact_line(line) or len(line) >= TITLE_SKIP_LEN:
            continue
        if len(line) < TITLE_MAX_LEN and _contains_any(line, TITLE_KEYWORDS):
            return line
    return ""


def extract_city(text: str) -> str:
    return _first_group(CITY_PATTERNS, text or "")

# ============================================================
# SECTIONS
# ============================================================

def extract_summary(lines: Sequence[str]) -> str:
    """
    Prose under a summary/profile/objective heading.
    "Personal profile"-style headings are not summaries, and personal
    detail lines (DOB, CNIC, religion...) are dropped from the block.
    """
    block = _section_block(
        lines,
        SUMMARY_KEYWORDS,
        SUMMARY_END_KEYWORDS,
        SUMMARY_MAX_LINES,
        skip=SUMMARY_SKIP_KEYWORDS,
    )
    kept = [
        l for l in block
        if not _contains_any(l, PERSONAL_DETAIL_TERMS) and len(l) > SUMMARY_MIN_LINE_LEN
    ]
    return " ".join(kept)[:SUMMARY_MAX_CHARS]


def extract_work_experience(lines: Sequence[str]) -> str:
    block = _section_block(lines, EXPERIENCE_KEYWORDS, EXPERIENCE_END_KEYWORDS, EXPERIENCE_MAX_LINES)
    return "\n".join(block)


def extract_skills(lines: Sequence[str]) -> str:
    block = _section_block(lines, SKILLS_KEYWORDS, SKILLS_END_KEYWORDS, SKILLS_MAX_LINES)
    return ", ".join(block)


def extract_education(lines: Sequence[str]) -> str:
    block = _section_block(lines, EDUCATION_KEYWORDS, EDUCATION_END_KEYWORDS, EDUCATION_MAX_LINES)
    return "\n".join(block)

# ============================================================
# PERSONAL DETAILS + SALARY
# ============================================================

def extract_date_of_birth(text: str) -> str:
    return _first_group(DOB_PATTERNS, text or "")


def extract_nationality(text: str) -> str:
    return _first_group((NATIONALITY_RE,), text or "")


def extract_marital_status(text: str) -> str:
    return _first_group((MARITAL_RE,), text or "")


def extract_expected_salary(text: str) -> str:
    m = SALARY_RE.search(text or "")
    if not m:
        return ""
    return "R" + m.group(1).replace(",", "")

# ============================================================
# EMPLOYERS
# ============================================================

def extract_previous_employers(text: str) -> List[PreviousEmployer]:
    companies: List[str] = []
    for pattern in EMPLOYER_PATTERNS:
        for m in pattern.finditer(text or ""):
            if len(companies) >= MAX_EMPLOYERS:
                break
            name = m.group(1).strip()
            if len(name) > 2 and name not in companies:
                companies.append(name)

    return [PreviousEmployer(company_name=c) for c in companies]

# ============================================================
# ENTRY POINT
# ============================================================

def extract_cv_fields(text: str) -> ExtractedProfile:
    """
    Best-effort questionnaire pre-fill from raw CV text.

    Pure and deterministic: every heuristic is an independent first-match
    pass over the same lines, and anything not found stays empty. Callers
    should reject near-empty text (see cv_prefill.core.parsing.has_enough_text) first.
    """
    text = text or ""
    lines = split_lines(text)
    logger.debug("Parsing CV with %d lines of text", len(lines))

    first_name, last_name = extract_name(lines)
    profile = ExtractedProfile(
        first_name=first_name,
        last_name=last_name,
        email_address=extract_email(text),
        contact_number=extract_phone(text),
        city=extract_city(text),
        job_title=extract_job_title(lines),
        professional_summary=extract_summary(lines),
        work_experience=extract_work_experience(lines),
        expected_salary=extract_expected_salary(text),
        skills=extract_skills(lines),
        education=extract_education(lines),
        date_of_birth=extract_date_of_birth(text),
        nationality=extract_nationality(text),
        marital_status=extract_marital_status(text),
        previous_employers=extract_previous_employers(text),
    )

    for field, value in profile.model_dump(exclude={"previous_employers"}).items():
        if value:
            logger.debug("Found %s: %.100s", field, value)

    logger.info(
        "CV extraction complete: %d/%d fields, %d employers",
        sum(1 for v in profile.model_dump(exclude={"previous_employers"}).values() if v),
        len(ExtractedProfile.model_fields) - 1,
        len(profile.previous_employers),
    )
    return profile
