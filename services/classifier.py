# FILE: services/classifier.py
"""
Voice command classifier.

Turns one transcript into exactly one Creation Request:

1. bind a project (ambient, else resolved by name)
2. run every detector and every extractor independently
3. walk RULES in order; the first rule that applies builds the request

No LLM calls, no writes. The only I/O is the optional project lookup.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional

from core.intent import AmbientContext
from models.requests import (
    BusinessPlanRequest,
    CreationRequest,
    InventoryRequest,
    ProjectRequest,
    TaskRequest,
)
from services.date_resolver import get_today
from services.detectors import IntentSignals, detect_signals
from services.extractors import ExtractedFields, extract_fields
from services.project_lookup import ProjectLookup
from services.project_resolver import resolve_project

logger = logging.getLogger("voice_classifier")
logger.setLevel(logging.INFO)


@dataclass(frozen=True)
class Classification:
    """Everything a request builder may draw on."""

    utterance: str
    context: AmbientContext
    fields: ExtractedFields
    today: date

    @property
    def project_id(self) -> Optional[str]:
        return self.context.project.id if self.context.project else None


# ---------------------------------------------------------------------
# Request builders
# ---------------------------------------------------------------------
def build_task(c: Classification) -> TaskRequest:
    f = c.fields
    return TaskRequest(
        title=f.title,
        description=f.description,
        status=f.status,
        priority=f.priority,
        due_date=f.due_date,
        is_project_task=c.project_id is not None,
        project_id=c.project_id,
        created_by=c.context.user_id,
        assignees=[c.context.user_id],
    )


def build_inventory(c: Classification) -> InventoryRequest:
    f = c.fields
    has_price = f.price is not None
    return InventoryRequest(
        title=f.title,
        description=f.description,
        item_type=f.item_type,
        fundraiser=f.fundraiser,
        tags=f.tags or None,
        **{f.item_type.quantity_field: f.quantity},
        price=f.price,
        estimated_price=True if has_price else None,
        price_date=c.today if has_price else None,
        project_id=c.project_id,
        added_by=c.context.user_id,
        assignees=[c.context.user_id],
    )


def build_project(c: Classification) -> ProjectRequest:
    f = c.fields
    return ProjectRequest(
        title=f.title,
        location=f.location,
        property_status=f.property_status,
        values_mission_goals=f.description,
        created_by=c.context.user_id,
    )


def build_business_plan(c: Classification) -> BusinessPlanRequest:
    project = c.context.project
    return BusinessPlanRequest(
        project_id=project.id,
        project_title=project.title,
        query=c.utterance,
    )


# ---------------------------------------------------------------------
# Arbitration (PURE, DETERMINISTIC, FIRST MATCH WINS)
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class Rule:
    name: str
    applies: Callable[[IntentSignals], bool]
    build: Callable[[Classification], CreationRequest]


RULES: List[Rule] = [
    Rule(
        "business_plan",
        lambda s: s.business_plan and s.project_in_scope,
        build_business_plan,
    ),
    # Task is also the catch-all when neither inventory nor project fired
    Rule(
        "task",
        lambda s: s.task or not (s.inventory or s.project),
        build_task,
    ),
    Rule("inventory", lambda s: s.inventory, build_inventory),
    Rule(
        "project",
        lambda s: s.project and not s.project_in_scope,
        build_project,
    ),
]


def select_rule(signals: IntentSignals) -> Rule:
    for rule in RULES:
        if rule.applies(signals):
            return rule
    # Default to task if no rule applies
    return RULES[1]


async def classify(
    utterance: str,
    context: AmbientContext,
    *,
    lookup: Optional[ProjectLookup] = None,
    today: Optional[date] = None,
) -> CreationRequest:
    """
    Classify a non-empty transcript into one Creation Request.

    `lookup` is only consulted when no project is open in `context`;
    `today` anchors every relative date and defaults to the system clock.
    """
    today = today or get_today()

    if context.project is None:
        resolved = await resolve_project(utterance, lookup)
        if resolved is not None:
            context = context.with_project(resolved)

    signals = detect_signals(utterance, project_in_scope=context.project is not None)
    rule = select_rule(signals)

    request = rule.build(
        Classification(
            utterance=utterance,
            context=context,
            fields=extract_fields(utterance, today),
            today=today,
        )
    )

    logger.info(
        f"[CLASSIFIED] user_id={context.user_id}, kind={request.kind.value}, "
        f"rule={rule.name}, project_id={context.project.id if context.project else None}"
    )
    return request
