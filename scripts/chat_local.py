#!/usr/bin/env python3
"""
Interactive local chat harness (no HTTP server).

Usage:
  python3 scripts/chat_local.py

What it does:
- Keeps the message history and conversation state for the session
- Sends your typed messages through the same SalonChatUseCase as POST /chat
- Prints the tools the agent called, the selected service/slot, and the reply text
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.application.utils.state_helpers import reset_all_transient  # noqa: E402
from app.domain.entities.conversation_state import ConversationState  # noqa: E402
from app.wiring.dependencies import get_chat_use_case  # noqa: E402


def _print_header() -> None:
    print("\nLocal Salon Chat")
    print("-" * 60)
    print("Type your message and press Enter.")
    print("Commands: /new (reset conversation), /state, /quit, /help")
    print("-" * 60)


def _print_state(state: ConversationState) -> None:
    service = state.selected_service.service if state.selected_service else None
    slot = state.selected_slot.time if state.selected_slot else None
    booking = state.booking.status if state.booking else None
    print(f"service: {service}")
    print(f"slot: {slot}")
    print(f"booking: {booking}")


def main() -> None:
    use_case = get_chat_use_case()
    history: list[dict[str, Any]] = []
    state = ConversationState()
    _print_header()

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
            print("  /new   -> forget history and selections")
            print("  /state -> show selected service, slot and booking status")
            print("  /quit  -> exit")
            continue
        if cmd == "/new":
            history = []
            state = reset_all_transient(state)
            print("Conversation reset.")
            continue
        if cmd == "/state":
            _print_state(state)
            continue

        history.append({"role": "user", "content": user_text})
        turn = use_case.respond(history, state)
        state = turn.state
        history.append({"role": "assistant", "content": turn.text})

        if turn.tools_called:
            print("\n--- Tools ---")
            print(", ".join(turn.tools_called))

        print("\n--- Reply ---")
        print(turn.text.strip() or "(empty reply)")
        print("-" * 60)


if __name__ == "__main__":
    main()
