#!/usr/bin/env python3
"""
Interactive local chat harness (no HTTP, no channel).

Usage:
  python3 scripts/chat_local.py

What it does:
- Keeps a stable user / conversation id for the session
- Sends your typed messages through the same HandleTurnUseCase the API uses
- Prints every reply, including suggested actions
"""
from __future__ import annotations

import os
import sys
import time
from pathlib import Path
from uuid import uuid4

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from multilingual_bot.domain.entities.activity import Activity, ActivityType
from multilingual_bot.wiring.dependencies import get_container


def _print_header(user_id: str) -> None:
    print("\nLocal Chat Harness")
    print("-" * 60)
    print(f"user_id: {user_id}")
    print("Type your message and press Enter. Try 'en', 'ko' or 'es'.")
    print("Commands: /new (new user), /quit, /help")
    print("-" * 60)


def main() -> None:
    user_id = os.getenv("CHAT_USER_ID", "local_user_1")
    use_case = get_container()["use_case"]
    _print_header(user_id)

    while True:
        try:
            user_text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_text:
            continue

        cmd = user_text.lower()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print("Commands:")
            print("  /new  -> start over as a new user (default language again)")
            print("  /quit -> exit")
            continue
        if cmd == "/new":
            user_id = f"local_user_{int(time.time())}"
            print(f"New user_id: {user_id}")
            continue

        activity = Activity(
            id=uuid4().hex,
            type=ActivityType.MESSAGE.value,
            text=user_text,
            channel_id="local",
            user_id=user_id,
            conversation_id=user_id,
        )
        for reply in use_case.handle(activity):
            print(f"bot: {reply.text}")
            if reply.suggested_actions:
                print(f"     [{' | '.join(reply.suggested_actions)}]")


if __name__ == "__main__":
    main()
