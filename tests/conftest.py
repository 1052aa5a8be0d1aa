from __future__ import annotations

import pytest

SAMPLE_CV = """John Smith
Senior Software Engineer
john.smith@example.com
+27 82 123 4567
City: Cape Town
Expected salary: R15,000 per month
Summary
Experienced engineer building web platforms for retail clients.
Comfortable leading small teams through delivery.
Passionate about clean code and mentoring juniors.
Experience
Developer at Acme Ltd
Built internal tools for the finance team.
Education
BSc Computer Science, University of Cape Town
Skills
Python
JavaScript
SQL
"""


@pytest.fixture
def sample_cv() -> str:
    return SAMPLE_CV
