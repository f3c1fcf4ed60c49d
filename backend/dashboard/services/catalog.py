"""
Fixed option lists backing the client and profile forms.
"""
from typing import List, Optional

TIMEZONE_OPTIONS = [
    {"value": "America/New_York", "label": "North America (USA) - New York (UTC-05:00)"},
    {"value": "America/Los_Angeles", "label": "North America (USA) - Los Angeles (UTC-08:00)"},
    {"value": "America/Chicago", "label": "North America (USA) - Chicago (UTC-06:00)"},
    {"value": "America/Toronto", "label": "North America (Canada) - Toronto (UTC-05:00)"},
    {"value": "Europe/London", "label": "Europe (UK) - London (UTC+00:00)"},
    {"value": "Europe/Paris", "label": "Europe (France) - Paris (UTC+01:00)"},
    {"value": "Europe/Berlin", "label": "Europe (Germany) - Berlin (UTC+01:00)"},
    {"value": "Asia/Kolkata", "label": "Asia (India) - Kolkata (UTC+05:30)"},
    {"value": "Asia/Tokyo", "label": "Asia (Japan) - Tokyo (UTC+09:00)"},
    {"value": "Asia/Shanghai", "label": "Asia (China) - Shanghai (UTC+08:00)"},
    {"value": "Australia/Sydney", "label": "Australia (Australia) - Sydney (UTC+10:00)"},
    {"value": "Africa/Cairo", "label": "Africa (Egypt) - Cairo (UTC+02:00)"},
    {"value": "Africa/Johannesburg", "label": "Africa (South Africa) - Johannesburg (UTC+02:00)"},
    {"value": "America/Sao_Paulo", "label": "South America (Brazil) - Sao Paulo (UTC-03:00)"},
    {"value": "Pacific/Auckland", "label": "Pacific (New Zealand) - Auckland (UTC+12:00)"},
    {"value": "UTC", "label": "Coordinated Universal Time (UTC±00:00)"},
]

BUSINESS_TYPES = [
    "SaaS",
    "E-commerce",
    "FinTech",
    "HealthTech",
    "EdTech",
    "Manufacturing",
    "Retail",
    "Other",
]

OTHER_TECH = "Other"
TECH_STACK_OPTIONS = ["React + Firebase", "MERN", "Java", OTHER_TECH]

PLAN_OPTIONS = [
    {"value": "Tech Launch Bundle", "label": "Tech Launch Bundle (₹1,245,000/Year)"},
    {"value": "Secure Tech Bundle", "label": "Secure Tech Bundle (₹1,411,000/Year)"},
    {"value": "Sales & Growth Bundle", "label": "Sales & Growth Bundle (₹1,091,244/Year)"},
    {"value": "Security & Growth Bundle", "label": "Security & Growth Bundle (₹1,343,070/Year)"},
    {"value": "Operations & Management Bundle", "label": "Operations & Management Bundle (₹1,175,186/Year)"},
    {"value": "Comprehensive Security Bundle", "label": "Comprehensive Security Bundle (₹1,594,896/Year)"},
    {"value": "Security & Tech Bundle", "label": "Security & Tech Bundle (₹1,510,954/Year)"},
    {"value": "Creative & Content Bundle", "label": "Creative & Content Bundle (₹1,007,302/Year)"},
    {"value": "Executive Leadership Bundle", "label": "Executive Leadership Bundle (₹1,846,722/Year)"},
    {"value": "Startup Essentials Bundle", "label": "Startup Essentials Bundle (₹1,385,041/Year)"},
]

DEPARTMENTS = ["Marketing", "Sales", "Tech", "Finance"]
UNASSIGNED_DEPARTMENT = "Unassigned"

TIMEZONE_VALUES = frozenset(option["value"] for option in TIMEZONE_OPTIONS)
PLAN_VALUES = frozenset(option["value"] for option in PLAN_OPTIONS)


def unknown_tech_stack(selected: List[str], stored: Optional[List[str]] = None) -> List[str]:
    """Entries that are neither catalog options nor already on the client."""
    allowed = set(TECH_STACK_OPTIONS).union(stored or [])
    return [tech for tech in selected if tech not in allowed]


def normalize_tech_stack(selected: List[str], other: Optional[str] = None) -> List[str]:
    """
    Resolve the tech stack selection into the list that gets stored.

    When "Other" is ticked and a free-text value was given, "Other" is
    replaced by that value at the end of the list. Duplicates are dropped.
    """
    stack = list(dict.fromkeys(selected))
    custom = (other or "").strip()
    if OTHER_TECH in stack and custom:
        stack = [tech for tech in stack if tech != OTHER_TECH]
        if custom not in stack:
            stack.append(custom)
    return stack


def normalize_skills(skills: List[str]) -> List[str]:
    """Trim skills, drop blanks and repeats, keep first-seen order."""
    cleaned = (skill.strip() for skill in skills)
    return list(dict.fromkeys(skill for skill in cleaned if skill))


def is_profile_complete(department: Optional[str]) -> bool:
    return bool(department) and department != UNASSIGNED_DEPARTMENT
