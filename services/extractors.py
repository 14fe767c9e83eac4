# FILE: services/extractors.py
"""
Field extractors.

Every extractor is an independent pure function of the utterance that
returns one optional value. They never short-circuit each other;
`extract_fields` runs all of them and the classifier picks the subset
that belongs to the chosen request.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from core.vocabulary import ItemType, PropertyStatus, TaskPriority, TaskStatus
from services.date_resolver import DUE_DATE_PHRASE, resolve_due_date
from services.detectors import OWNED_ITEM

# -----------------------------
# Title
# -----------------------------
_QUOTED_NAME_RE = re.compile(r"\b(?:called|named|titled)\s+[\"“]([^\"”]+)[\"”]", re.IGNORECASE)
_NAMED_RE = re.compile(r"\b(?:called|named|titled)\s+[\"']?([^\"'.,]+)[\"']?", re.IGNORECASE)
_CREATE_RE = re.compile(
    r"\b(?:add|create|make|set up)\s+(?:(?:a|an)\s+)?(?:(?:task|todo|project|item)\s+)?"
    r"(?:(?:called|named|titled)\s+)?[\"']?([^\"'.,]+)[\"']?",
    re.IGNORECASE,
)
_REMIND_RE = re.compile(r"\bremind me to\s+([^.,]+)", re.IGNORECASE)

_LOCATION_PREPOSITION = r"(?:located in|based in|in|at|near)"
_PROJECT_PREPOSITION = r"(?:related to|associated with|for|in|to|with|under)"

# A project name never runs across another preposition
PROJECT_NAME = rf"(?:(?!\b{_PROJECT_PREPOSITION}\b)[^\"'.,])+?"

_TRAILING_DUE_DATE_RE = re.compile(rf"\s+{DUE_DATE_PHRASE}\b.*$", re.IGNORECASE)
_TRAILING_PROJECT_RE = re.compile(
    rf"\s+{_PROJECT_PREPOSITION}\s+(?:the\s+)?"
    rf"(?:(?:project|initiative)\b|{PROJECT_NAME}\s+(?:project|initiative)\b).*$",
    re.IGNORECASE,
)
_TRAILING_LOCATION_RE = re.compile(rf"\s+{_LOCATION_PREPOSITION}\s+.*$", re.IGNORECASE)


def _trim_clause(value: str, pattern: re.Pattern) -> str:
    trimmed = pattern.sub("", value).strip()
    return trimmed or value


def trim_title(value: str, *, cut_location: bool = False) -> str:
    """Drop trailing deadline, project and (optionally) location clauses from a captured name."""
    value = value.strip()
    value = _trim_clause(value, _TRAILING_DUE_DATE_RE)
    value = _trim_clause(value, _TRAILING_PROJECT_RE)
    if cut_location:
        value = _trim_clause(value, _TRAILING_LOCATION_RE)
    return value


def extract_title(text: str) -> str:
    """
    Title of the thing being created. Falls back to the whole utterance,
    so the result is never empty for non-empty input.
    """
    match = _QUOTED_NAME_RE.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()

    for pattern, cut_location in ((_NAMED_RE, True), (_CREATE_RE, True), (_REMIND_RE, False)):
        match = pattern.search(text)
        if match and match.group(1).strip():
            return trim_title(match.group(1), cut_location=cut_location)

    return text.strip()


# -----------------------------
# Priority / status
# -----------------------------
_URGENT_RE = re.compile(r"\b(?:(?<!not )urgent|emergency|asap|immediately|critical)\b")
_HIGH_RE = re.compile(r"\b(?:high|(?<!not )important|(?<!medium )(?<!normal )(?<!low )priority)\b")
_LOW_RE = re.compile(r"\b(?:low|whenever|not urgent|not important|can wait)\b")

_IN_PROGRESS_RE = re.compile(r"\b(?:in progress|started|working on|begun)\b")
_DONE_RE = re.compile(r"\b(?:done|completed|finished|ready)\b")
_BLOCKED_RE = re.compile(r"\b(?:blocked|stuck|waiting|on hold|paused)\b")


def extract_priority(text: str) -> TaskPriority:
    lowered = text.lower()
    if _URGENT_RE.search(lowered):
        return TaskPriority.URGENT
    if _HIGH_RE.search(lowered):
        return TaskPriority.HIGH
    if _LOW_RE.search(lowered):
        return TaskPriority.LOW
    return TaskPriority.MEDIUM


def extract_status(text: str) -> TaskStatus:
    lowered = text.lower()
    if _IN_PROGRESS_RE.search(lowered):
        return TaskStatus.IN_PROGRESS
    if _DONE_RE.search(lowered):
        return TaskStatus.DONE
    if _BLOCKED_RE.search(lowered):
        return TaskStatus.BLOCKED
    return TaskStatus.TODO


# -----------------------------
# Quantity / price
# -----------------------------
UNIT_WORDS = (
    r"units?|pieces?|items?|kg|pounds?|lbs?|liters?|litres?|gallons?|bags?|box(?:es)?"
    r"|buckets?|bales?|yards?|feet|foot|meters?|metres?|rolls?|packs?|plants?|trees?|seeds?"
)

_COUNT = r"(\d{1,3}(?:,\d{3})+|\d+)"
_NUMBER = r"(\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)"

_QUANTITY_RES = [
    re.compile(rf"\b{_COUNT}\s+(?:{UNIT_WORDS})\b"),
    re.compile(rf"\b(?:quantity|qty)(?:\s+of)?\s+{_COUNT}\b"),
    re.compile(rf"\bneed\s+{_COUNT}\b"),
]

_PRICE_RES = [
    re.compile(rf"\${_NUMBER}"),
    re.compile(rf"\b{_NUMBER}\s+(?:dollars|usd|euros|pounds)\b"),
    re.compile(rf"\b(?:costs?|price|worth|value)(?:\s+of)?\s+\$?{_NUMBER}"),
]


def _clean_num(tok: str) -> Optional[float]:
    tok = tok.replace("$", "").replace(",", "").strip()
    try:
        return float(tok)
    except ValueError:
        return None


def extract_quantity(text: str) -> int:
    lowered = text.lower()
    for pattern in _QUANTITY_RES:
        match = pattern.search(lowered)
        if match:
            return int(match.group(1).replace(",", ""))
    return 1


def extract_price(text: str) -> Optional[float]:
    lowered = text.lower()
    for pattern in _PRICE_RES:
        match = pattern.search(lowered)
        if match:
            value = _clean_num(match.group(1))
            if value is not None:
                return value
    return None


# -----------------------------
# Item type / property status / fundraiser
# -----------------------------
_OWNED_RE = re.compile(rf"\b(?:{OWNED_ITEM}|have|possess|acquired|bought|purchased)\b")
_BORROWED_RE = re.compile(r"\b(?:borrowed|rented|rental|temporary|loan)\b")
_OWNED_LAND_RE = re.compile(
    r"\b(?:owned land|my land|our land|my property|our property|already own|already have)\b"
)
_FUNDRAISER_RE = re.compile(r"\b(?:fundraiser|fundraising|fund raising|need funding|raise money)\b")


def extract_item_type(text: str) -> ItemType:
    lowered = text.lower()
    if _OWNED_RE.search(lowered):
        return ItemType.OWNED_RESOURCE
    if _BORROWED_RE.search(lowered):
        return ItemType.BORROWED_OR_RENTAL
    return ItemType.NEEDED_SUPPLY


def extract_property_status(text: str) -> PropertyStatus:
    if _OWNED_LAND_RE.search(text.lower()):
        return PropertyStatus.OWNED_LAND
    return PropertyStatus.POTENTIAL_PROPERTY


def extract_fundraiser(text: str) -> bool:
    return bool(_FUNDRAISER_RE.search(text.lower()))


# -----------------------------
# Free-text fields
# -----------------------------
_LOCATION_RE = re.compile(rf"\b{_LOCATION_PREPOSITION}\s+([^.,;!?]+)", re.IGNORECASE)
_TAGS_RE = re.compile(r"\b(?:tags?|tagged|categories|category|labeled as)(?:\s+with)?\s+([^.;!?]+)", re.IGNORECASE)
_TAG_SPLIT_RE = re.compile(r",|\s+and\s+")
_DESCRIPTION_RE = re.compile(r"\b(?:described as|description is|details are)\s+([^.]+)", re.IGNORECASE)


def extract_location(text: str) -> Optional[str]:
    match = _LOCATION_RE.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return None


def extract_tags(text: str) -> List[str]:
    match = _TAGS_RE.search(text)
    if not match:
        return []
    parts = _TAG_SPLIT_RE.split(match.group(1).lower())
    return [tag.strip() for tag in parts if tag.strip()]


def extract_description(text: str) -> Optional[str]:
    match = _DESCRIPTION_RE.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return None


# -----------------------------
# All fields at once
# -----------------------------
@dataclass(frozen=True)
class ExtractedFields:
    title: str
    description: Optional[str]
    priority: TaskPriority
    status: TaskStatus
    due_date: Optional[date]
    quantity: int
    price: Optional[float]
    item_type: ItemType
    property_status: PropertyStatus
    fundraiser: bool
    location: Optional[str]
    tags: List[str]


def extract_fields(text: str, today: date) -> ExtractedFields:
    return ExtractedFields(
        title=extract_title(text),
        description=extract_description(text),
        priority=extract_priority(text),
        status=extract_status(text),
        due_date=resolve_due_date(text, today),
        quantity=extract_quantity(text),
        price=extract_price(text),
        item_type=extract_item_type(text),
        property_status=extract_property_status(text),
        fundraiser=extract_fundraiser(text),
        location=extract_location(text),
        tags=extract_tags(text),
    )
