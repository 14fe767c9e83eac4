# FILE: services/project_resolver.py
import logging
import re
from asyncio import wait_for, TimeoutError
from typing import Optional

from config import PROJECT_LOOKUP_TIMEOUT
from core.intent import ProjectRef
from services.extractors import PROJECT_NAME, trim_title
from services.project_lookup import ProjectLookup

logger = logging.getLogger("project_resolver")
logger.setLevel(logging.INFO)

_PREPOSITION = r"\b(?:related to|associated with|for|in|to|with|under)\s+(?:the\s+)?"

# Mentions need the project keyword or quotes; "for $40" or "in Oregon" name nothing
MENTION_RES = [
    re.compile(_PREPOSITION + r"(?:project|initiative)\s+[\"']?([^\"'.,]+)[\"']?", re.IGNORECASE),
    re.compile(_PREPOSITION + rf"({PROJECT_NAME})\s+(?:project|initiative)\b", re.IGNORECASE),
    re.compile(_PREPOSITION + r"[\"“]([^\"”]+)[\"”]", re.IGNORECASE),
]


def extract_project_mention(text: str) -> Optional[str]:
    """Name of a project the utterance refers to, if it names one."""
    for pattern in MENTION_RES:
        match = pattern.search(text)
        if match and match.group(1).strip():
            return trim_title(match.group(1))
    return None


async def resolve_project(
    text: str,
    lookup: Optional[ProjectLookup],
    timeout: float = PROJECT_LOOKUP_TIMEOUT,
) -> Optional[ProjectRef]:
    """
    Bind a mentioned project by name.

    Never raises: a missing mention, no match, a slow collaborator or a
    failing one all mean "no project binding".
    """
    if lookup is None:
        return None

    name = extract_project_mention(text)
    if not name:
        return None

    try:
        project = await wait_for(lookup.find_project_by_name(name), timeout=timeout)
    except TimeoutError:
        logger.warning(f"Project lookup timed out after {timeout}s for name='{name}'")
        return None
    except Exception:
        logger.warning(f"Project lookup failed for name='{name}'", exc_info=True)
        return None

    if project is not None:
        logger.info(f"Found project: {project.title} ({project.id})")
    return project
