from __future__ import annotations

from enum import Enum
from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError

from agent.core.errors import MalformedInput


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    # Only ever prepended server-side, never kept in a client transcript.
    SYSTEM = "system"


class Turn(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    role: Role
    content: StrictStr


Transcript = Tuple[Turn, ...]


def parse_transcript(raw: Any) -> Transcript:
    """Validate a raw ``messages`` value into an ordered tuple of turns.

    Anything that is not a list of ``{role, content}`` objects with a known
    role and string content raises ``MalformedInput``.
    """
    if not isinstance(raw, list):
        raise MalformedInput(f"messages must be a list, got {type(raw).__name__}")

    turns = []
    for idx, item in enumerate(raw):
        if not isinstance(item, dict):
            raise MalformedInput(f"message {idx} is not an object")
        try:
            turns.append(Turn.model_validate(item))
        except ValidationError as exc:
            raise MalformedInput(f"message {idx}: {exc.errors()[0]['msg']}") from exc
    return tuple(turns)
