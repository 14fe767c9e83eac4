# FILE: services/detectors.py
"""
Intent detectors.

Each detector is a boolean match of the lower-cased utterance against
a fixed list of cue patterns. Detectors never look at each other; the
arbitration between them lives in services/classifier.py.
"""

import re
from dataclasses import dataclass
from typing import List

_WEEKDAY_OR_RELATIVE = (
    r"(?:tomorrow|today|monday|tuesday|wednesday|thursday|friday|saturday|sunday"
    r"|next week|next month)"
)

# "owned land" / "owned property" describe a site, not an inventory item
OWNED_ITEM = r"owned(?!\s+(?:land|property)\b)"

TASK_CUES: List[re.Pattern] = [
    re.compile(r"\b(?:task|todo|to do|to-do|remind me to|need to)\b"),
    re.compile(rf"\b(?:by|before|due|deadline)\b.*\b{_WEEKDAY_OR_RELATIVE}\b"),
    re.compile(r"\b(?:finish|complete|do|work on)\b"),
    re.compile(r"\b(?:high priority|urgent|important)\b"),
]

INVENTORY_CUES: List[re.Pattern] = [
    re.compile(r"\b(?:need|buy|purchase|get|acquire|order|item|supply|resource|inventory)\b"),
    re.compile(r"\b(?:quantity|units|pieces|kg|pounds|liters|gallons)\b"),
    re.compile(r"\b(?:costs?|price|worth|value|dollars|euros)\b"),
    re.compile(rf"\b(?:{OWNED_ITEM}|borrowed|rental|equipment|tool|material)\b"),
]

PROJECT_CUES: List[re.Pattern] = [
    re.compile(r"\b(?:project|initiative|plan|property|land|site|location)\b"),
    re.compile(r"\b(?:create project|new project|start project)\b"),
    re.compile(r"\b(?:permaculture design|zone|guild|water system|soil)\b"),
    re.compile(r"\b(?:owned land|potential property)\b"),
]

BUSINESS_PLAN_CUES: List[re.Pattern] = [
    re.compile(r"\b(?:business plan|executive summary|market analysis|financial plan|marketing strategy)\b"),
    re.compile(r"\b(?:operations|management|timeline|risk analysis|sustainability)\b"),
]


def _matches_any(patterns: List[re.Pattern], text: str) -> bool:
    lowered = text.lower()
    return any(pattern.search(lowered) for pattern in patterns)


def detect_task(text: str) -> bool:
    return _matches_any(TASK_CUES, text)


def detect_inventory(text: str) -> bool:
    return _matches_any(INVENTORY_CUES, text)


def detect_project(text: str) -> bool:
    return _matches_any(PROJECT_CUES, text)


def detect_business_plan(text: str) -> bool:
    return _matches_any(BUSINESS_PLAN_CUES, text)


@dataclass(frozen=True)
class IntentSignals:
    task: bool
    inventory: bool
    project: bool
    business_plan: bool
    project_in_scope: bool


def detect_signals(text: str, project_in_scope: bool) -> IntentSignals:
    """
    Run every detector once.

    A project already in scope suppresses project cues (no new project
    can be spawned from inside one) and is required for business-plan cues.
    """
    return IntentSignals(
        task=detect_task(text),
        inventory=detect_inventory(text),
        project=detect_project(text) and not project_in_scope,
        business_plan=detect_business_plan(text) and project_in_scope,
        project_in_scope=project_in_scope,
    )
