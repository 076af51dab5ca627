from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

import httpx

from agent.core.models import Role, Turn
from config.settings import get_settings


logger = logging.getLogger("proposal_assistant")

FALLBACK_REPLY = "I apologize, but I encountered an error. Please try again."

QUICK_PROMPTS: Tuple[str, ...] = (
    "Help me write the objectives section",
    "Develop a detailed methodology",
    "Create a comprehensive budget",
    "Explain ethical considerations",
)

Listener = Callable[[Turn], None]


class SessionBusy(RuntimeError):
    pass


class TranscriptStore:
    """Append-only conversation held for the lifetime of one session.

    Listeners are called after every append so a front end can re-render.
    There is no clear operation; a new session starts a new store.
    """

    def __init__(self) -> None:
        self._turns: List[Turn] = []
        self._listeners: List[Listener] = []

    @property
    def turns(self) -> Tuple[Turn, ...]:
        return tuple(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def append_turn(self, turn: Turn) -> None:
        if not turn.content:
            raise ValueError("Turn content must not be empty")
        self._turns.append(turn)
        for listener in self._listeners:
            listener(turn)

    def to_payload(self) -> dict:
        return {"messages": [t.model_dump(mode="json") for t in self._turns]}


class ChatSession:
    def __init__(
        self,
        store: Optional[TranscriptStore] = None,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        settings = get_settings()
        self.store = store if store is not None else TranscriptStore()
        self.url = url or settings.chat_api_url
        self.timeout = timeout if timeout is not None else settings.chat_api_timeout
        self._client = client
        self.busy = False

    def _post(self, payload: dict) -> dict:
        if self._client is not None:
            # An injected client carries its own timeout.
            response = self._client.post(self.url, json=payload)
            response.raise_for_status()
            return response.json()
        with httpx.Client(timeout=self.timeout) as client:
            response = client.post(self.url, json=payload)
            response.raise_for_status()
            return response.json()

    def send(self, text: str) -> Optional[Turn]:
        """Append ``text`` as a user turn and the server's reply after it.

        Returns the assistant turn, or None when ``text`` is blank. Transport
        failures and non-2xx replies become the fallback apology turn.
        """
        if not text.strip():
            return None
        if self.busy:
            raise SessionBusy("A response is still pending")

        self.busy = True
        try:
            self.store.append_turn(Turn(role=Role.USER, content=text))
            try:
                data = self._post(self.store.to_payload())
                reply = data.get("message") if isinstance(data, dict) else None
                if not isinstance(reply, str) or not reply:
                    raise ValueError("Response carried no message")
            except (httpx.HTTPError, ValueError) as exc:
                logger.warning("Chat request failed: %s", exc)
                reply = FALLBACK_REPLY
            assistant_turn = Turn(role=Role.ASSISTANT, content=reply)
            self.store.append_turn(assistant_turn)
            return assistant_turn
        finally:
            self.busy = False
