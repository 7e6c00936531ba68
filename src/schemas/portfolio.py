"""Portfolio document defaults.

The stored portfolio is free-form JSON. These structures describe the shape
the profile form expects, and are used to fill in whatever a stored document
leaves out.
"""

from typing import Any

EDUCATION_TEMPLATE: dict[str, Any] = {"school": "", "degree": "", "year": ""}

EXPERIENCE_TEMPLATE: dict[str, Any] = {
    "company": "",
    "position": "",
    "duration": "",
    "description": "",
}

PROJECT_TEMPLATE: dict[str, Any] = {
    "name": "",
    "description": "",
    "technologies": [""],
    "link": "",
}

CONTACT_DEFAULTS: dict[str, Any] = {
    "email": "",
    "phone": "",
    "location": "",
    "linkedin": "",
    "github": "",
}

PORTFOLIO_DEFAULTS: dict[str, Any] = {
    "fullName": "",
    "title": "",
    "bio": "",
    "skills": [""],
    "education": [EDUCATION_TEMPLATE],
    "experience": [EXPERIENCE_TEMPLATE],
    "projects": [PROJECT_TEMPLATE],
    "contact": CONTACT_DEFAULTS,
}
