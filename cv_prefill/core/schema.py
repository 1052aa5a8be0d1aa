# cv_prefill/core/schema.py
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class PreviousEmployer(_CamelModel):
    """Employer guessed from the CV; role and references are left for the candidate."""

    company_name: str
    role: str = ""
    references: str = ""


class ExtractedProfile(_CamelModel):
    """
    Best-effort questionnaire pre-fill guessed from CV text.
    Every field is always present; anything not found stays empty.
    Dump with by_alias=True for the camelCase JSON the client expects.
    """

    first_name: str = ""
    last_name: str = ""
    email_address: str = ""
    contact_number: str = ""
    city: str = ""
    job_title: str = ""
    professional_summary: str = Field(default="", max_length=500)
    work_experience: str = ""
    expected_salary: str = ""
    skills: str = ""
    education: str = ""
    date_of_birth: str = ""
    nationality: str = ""
    marital_status: str = ""
    previous_employers: List[PreviousEmployer] = Field(default_factory=list, max_length=3)
