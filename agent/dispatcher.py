from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple

from agent.core.errors import NoUserTurn
from agent.core.models import Role, Transcript, Turn, parse_transcript
from agent.core.prompt import with_system_prompt
from agent.core.templates import get_templates


logger = logging.getLogger("proposal_assistant")

DEFAULT_TEMPLATE = "default"


@dataclass(frozen=True)
class Category:
    name: str
    triggers: Tuple[str, ...]
    template_id: str
    # Greeting also fires on the very first exchange, whatever was typed.
    match_short_transcript: bool = False

    def matches(self, query: str, transcript: Sequence[Turn]) -> bool:
        if self.match_short_transcript and len(transcript) <= 1:
            return True
        return any(trigger in query for trigger in self.triggers)


# Order is the tie-break: the first matching category wins.
CATEGORIES: Tuple[Category, ...] = (
    Category("greeting", ("hello", "hi", "start"), "greeting", match_short_transcript=True),
    Category("objectives", ("objective", "aim", "goal"), "objectives"),
    Category("methodology", ("methodol", "implementation", "how to"), "methodology"),
    Category("budget", ("budget", "cost", "funding", "resource"), "budget"),
    Category("literature", ("literature", "background", "review", "reference"), "literature"),
    Category("impact", ("impact", "outcome", "deliverable", "benefit"), "impact"),
    Category(
        "ethics",
        ("ethic", "consent", "privacy", "governance", "regulatory", "icmr"),
        "ethics",
    ),
    Category(
        "team",
        ("team", "collaborat", "personnel", "expertise", "institution"),
        "team",
    ),
    Category(
        "writing",
        ("writing", "plagiarism", "paraphrase", "humanize", "tone"),
        "writing",
    ),
    Category(
        "timeline",
        ("timeline", "milestone", "gantt", "schedule", "workplan"),
        "timeline",
    ),
)


def select_category(query: str, transcript: Sequence[Turn]) -> Optional[Category]:
    """Return the first category whose predicate matches, or None.

    Matching is plain substring containment on the lower-cased query, so
    "aimless" still selects objectives.
    """
    lowered = query.lower()
    for category in CATEGORIES:
        if category.matches(lowered, transcript):
            return category
    return None


def latest_user_turn(transcript: Sequence[Turn]) -> Turn:
    for turn in reversed(transcript):
        if turn.role is Role.USER:
            return turn
    raise NoUserTurn(f"no user turn among {len(transcript)} messages")


def generate_response(
    query: str,
    transcript: Sequence[Turn],
    templates: Optional[Mapping[str, str]] = None,
) -> str:
    table = templates if templates is not None else get_templates()
    category = select_category(query, transcript)
    template_id = category.template_id if category else DEFAULT_TEMPLATE
    logger.info(
        "Dispatch: category=%s history_turns=%s",
        category.name if category else DEFAULT_TEMPLATE,
        len(transcript),
    )
    return table[template_id]


def dispatch(raw_messages: Any, templates: Optional[Mapping[str, str]] = None) -> str:
    """Map a raw ``messages`` payload to exactly one static response text.

    Raises ``MalformedInput`` for anything that is not a list of valid turns
    and ``NoUserTurn`` when no user-authored turn is present.
    """
    transcript: Transcript = parse_transcript(raw_messages)
    user_turn = latest_user_turn(transcript)
    # Persona turn count only; templates never read the persona text.
    logger.info(
        "Transcript with persona annotation: turns=%s query_len=%s",
        len(with_system_prompt(transcript)),
        len(user_turn.content),
    )
    return generate_response(user_turn.content, transcript, templates)
