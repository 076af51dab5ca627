from __future__ import annotations

from typing import Iterable, Tuple

from agent.core.models import Role, Turn
from agent.core.templates import get_templates


SYSTEM_PROMPT: str = get_templates()["system_prompt"]


def with_system_prompt(turns: Iterable[Turn]) -> Tuple[Turn, ...]:
    # The persona turn is an internal annotation and never goes back to the client.
    return (Turn(role=Role.SYSTEM, content=SYSTEM_PROMPT), *turns)
