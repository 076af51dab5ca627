from __future__ import annotations

import argparse
import sys
from typing import Iterable, Optional, TextIO

from agent.core.models import Role, Turn
from client.session import QUICK_PROMPTS, ChatSession, TranscriptStore
from config.settings import get_settings


WELCOME = (
    "Welcome! I'm Dr. Rajesh Kumar\n"
    "Your expert research associate for preparing your DBT proposal.\n"
    "I'll guide you through every section with original, plagiarism-free content\n"
    "in a humanized, professional tone.\n"
)

LABELS = {Role.USER: "You", Role.ASSISTANT: "Dr. Kumar"}
PENDING = "(Dr. Kumar is thinking...)"


def render_turn(turn: Turn, out: TextIO) -> None:
    out.write(f"\n{LABELS.get(turn.role, turn.role.value)}:\n{turn.content}\n")
    if turn.role is Role.USER:
        # Shown until the reply turn is appended.
        out.write(f"\n{PENDING}\n")
    out.flush()


def print_quick_prompts(out: TextIO) -> None:
    out.write("\nTry one of these (type its number):\n")
    for idx, prompt in enumerate(QUICK_PROMPTS, start=1):
        out.write(f"  {idx}. {prompt}\n")


def resolve_input(line: str) -> str:
    text = line.strip()
    if text.isdigit() and 1 <= int(text) <= len(QUICK_PROMPTS):
        return QUICK_PROMPTS[int(text) - 1]
    return text


def run(
    session: ChatSession,
    lines: Iterable[str],
    out: TextIO = sys.stdout,
) -> None:
    session.store.subscribe(lambda turn: render_turn(turn, out))
    out.write(WELCOME)
    print_quick_prompts(out)

    for line in lines:
        text = line.strip()
        if text == "/quit":
            break
        if text == "/prompts":
            print_quick_prompts(out)
            continue
        session.send(resolve_input(text))


def _stdin_lines(out: TextIO) -> Iterable[str]:
    while True:
        out.write("\n> ")
        out.flush()
        line = sys.stdin.readline()
        if not line:
            return
        yield line


def main(argv: Optional[list] = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Chat with the DBT proposal assistant")
    parser.add_argument("--url", default=settings.chat_api_url, help="Chat endpoint URL")
    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.chat_api_timeout,
        help="Request timeout in seconds",
    )
    args = parser.parse_args(argv)

    session = ChatSession(TranscriptStore(), url=args.url, timeout=args.timeout)
    try:
        run(session, _stdin_lines(sys.stdout))
    except KeyboardInterrupt:
        pass
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
