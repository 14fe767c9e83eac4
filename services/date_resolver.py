"""
Date Resolver Service

- Converts spoken deadline expressions into a concrete due date
- Every result is relative to an injected `today`, never to a hidden clock
"""

import re
from datetime import date, timedelta
from typing import Callable, List, Optional, Tuple

from dateutil.relativedelta import relativedelta, MO, TU, WE, TH, FR, SA, SU


WEEKDAYS = {
    "monday": MO,
    "tuesday": TU,
    "wednesday": WE,
    "thursday": TH,
    "friday": FR,
    "saturday": SA,
    "sunday": SU,
}

_WEEKDAY_NAMES = "|".join(WEEKDAYS)

# Anything that names a deadline; used to strip deadlines off captured titles
_RELATIVE_PHRASE = (
    r"today|tomorrow|next\s+week|next\s+month|in\s+an?\s+(?:week|month)"
    r"|in\s+\d+\s+(?:days?|weeks?|months?)"
    rf"|(?:next|this)\s+(?:{_WEEKDAY_NAMES})"
)
DUE_DATE_PHRASE = (
    rf"(?:(?:(?:by|before|due|on)\s+)?(?:{_RELATIVE_PHRASE})"
    rf"|(?:by|before|due|on)\s+(?:{_WEEKDAY_NAMES}))"
)


def get_today() -> date:
    """Return today's date (system clock)."""
    return date.today()


def _offset(days: int) -> Callable[[re.Match, date], date]:
    return lambda _match, today: today + timedelta(days=days)


def _span(multiplier: int) -> Callable[[re.Match, date], date]:
    return lambda match, today: today + timedelta(days=int(match.group(1)) * multiplier)


def _weekday(match: re.Match, today: date) -> date:
    """
    Next occurrence of the named weekday strictly after today.
    "this <weekday>" spoken on that weekday means today.
    """
    qualifier, name = match.group(1), match.group(2)
    target = WEEKDAYS[name]
    if qualifier == "this" and today.weekday() == target.weekday:
        return today
    return today + relativedelta(days=+1, weekday=target(+1))


# Ordered by specificity; only the first matching rule applies
DUE_DATE_RULES: List[Tuple[re.Pattern, Callable[[re.Match, date], date]]] = [
    (re.compile(r"\btoday\b"), _offset(0)),
    (re.compile(r"\btomorrow\b"), _offset(1)),
    (re.compile(r"\b(?:next week|in a week)\b"), _offset(7)),
    (re.compile(r"\b(?:next month|in a month)\b"), _offset(30)),
    (re.compile(r"\bin\s+(\d+)\s+days?\b"), _span(1)),
    (re.compile(r"\bin\s+(\d+)\s+weeks?\b"), _span(7)),
    (re.compile(r"\bin\s+(\d+)\s+months?\b"), _span(30)),
    (re.compile(rf"\b(next|this)\s+({_WEEKDAY_NAMES})\b"), _weekday),
]


def resolve_due_date(text: str, today: Optional[date] = None) -> Optional[date]:
    """
    Resolve the first deadline expression found in `text`.
    Returns None if no recognized pattern is found.
    """
    text = text.lower()
    today = today or get_today()

    for pattern, resolve in DUE_DATE_RULES:
        match = pattern.search(text)
        if match:
            return resolve(match, today)

    return None
