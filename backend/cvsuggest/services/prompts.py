# backend/cvsuggest/services/prompts.py
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Tuple

NOT_SPECIFIED = "Not specified"

SYSTEM_PROMPT = (
    "You are a professional CV writing expert. Generate exactly 3 distinct, high-quality suggestions. "
    "Return them as a JSON object with this exact format: "
    '{"suggestions": [{"option": 1, "text": "suggestion text"}, '
    '{"option": 2, "text": "suggestion text"}, '
    '{"option": 3, "text": "suggestion text"}]}'
)

JSON_INSTRUCTION = (
    'Return as JSON with "suggestions" array containing objects with '
    '"option" (number) and "text" (string) fields.'
)

# section -> (heading, [(label, data key), ...], style line)
TEMPLATES: Dict[str, Tuple[str, List[Tuple[str, str]], str]] = {
    "objective": (
        "Generate 3 professional CV objective statements for:",
        [("Job Title", "jobTitle"), ("Experience", "experience"), ("Key Skills", "skills")],
        "Each objective should be 2-3 sentences, professional, and tailored to the role.",
    ),
    "experience": (
        "Generate 3 professional descriptions for this work experience:",
        [
            ("Job Title", "jobTitle"),
            ("Company", "company"),
            ("Duration", "duration"),
            ("Responsibilities", "responsibilities"),
        ],
        "Each description should highlight achievements and impact using action verbs.",
    ),
    "education": (
        "Generate 3 professional descriptions for this education:",
        [
            ("Degree", "degree"),
            ("Field", "field"),
            ("University", "university"),
            ("Achievements", "achievements"),
        ],
        "Each description should emphasize relevant coursework, projects, or achievements.",
    ),
    "skills": (
        "Generate 3 professional skill descriptions for:",
        [("Technical Skills", "technical"), ("Soft Skills", "soft"), ("Tools/Technologies", "tools")],
        "Each description should be concise and highlight proficiency levels where relevant.",
    ),
    "summary": (
        "Generate 3 professional CV summary statements for:",
        [
            ("Job Title", "jobTitle"),
            ("Years of Experience", "yearsExperience"),
            ("Key Achievements", "achievements"),
            ("Core Skills", "coreSkills"),
        ],
        "Each summary should be 3-4 sentences that capture career highlights and value proposition.",
    ),
}

KNOWN_SECTIONS = tuple(TEMPLATES)


def _render(val: Any) -> str:
    # form values as a browser would print them: true, a,b, 3
    if isinstance(val, bool):
        return "true" if val else "false"
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    if isinstance(val, (list, tuple)):
        return ",".join("" if v is None else _render(v) for v in val)
    if isinstance(val, dict):
        return json.dumps(val, ensure_ascii=False, separators=(",", ":"))
    return str(val)


def _field(data: Mapping[str, Any], key: str) -> str:
    val = data.get(key)
    return _render(val) if val else NOT_SPECIFIED


def build_prompt(section: str, data: Mapping[str, Any]) -> str:
    """Turn a CV section and its form fields into the user prompt.

    Known sections list their fields one per line, with NOT_SPECIFIED for
    anything empty. Unknown sections get the whole mapping as compact JSON.
    """
    template = TEMPLATES.get(section)
    if template is None:
        serialized = json.dumps(dict(data), ensure_ascii=False, separators=(",", ":"))
        return (
            f"Generate 3 professional CV suggestions for the {section} section based on: {serialized}\n"
            f"{JSON_INSTRUCTION}"
        )

    heading, fields, style = template
    lines = [heading]
    lines += [f"{label}: {_field(data, key)}" for label, key in fields]
    lines += ["", style, JSON_INSTRUCTION]
    return "\n".join(lines)


def build_messages(section: str, data: Mapping[str, Any]) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_prompt(section, data)},
    ]
