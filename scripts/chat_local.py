#!/usr/bin/env python3
"""
Interactive local chat harness (no HTTP, no WhatsApp).

Usage:
  python3 scripts/chat_local.py

What it does:
- Keeps a stable user key for the session
- Sends your typed messages through the same HandleIncomingMessageUseCase
- Prints the current step and the reply text
"""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from quotebot.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from quotebot.application.use_cases.send_reply import SendReplyUseCase
from quotebot.domain.entities.message import Message
from quotebot.infrastructure.store.memory_store import MemoryConversationStore
from quotebot.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform
from quotebot.wiring.dependencies import build_flow, get_catalog, get_extractor


def _print_header(user_key: str) -> None:
    print("\nLocal Quote Chat")
    print("-" * 60)
    print(f"user_key: {user_key}")
    print("Type your message and press Enter.")
    print("Commands: /new (new user), /state, /quit, /help")
    print("-" * 60)


def _print_state(store: MemoryConversationStore, user_key: str) -> None:
    state = store.get_state(user_key)
    if state is None:
        print("(no state yet)")
        return
    data = state.data
    print("\n--- State ---")
    print(f"step: {state.step.value}")
    print(f"category: {data.category.name if data.category else None}")
    print(f"product: {data.product.name if data.product else None}")
    print(f"dimensions: {[(d.name, d.value) for d in data.dimensions]}")
    print(f"materials: {[m.name for m in data.materials]}")
    print(f"finishes: {[f.name for f in data.finishes]} (confirmed={data.finishes_confirmed})")
    print(f"quantities: {list(data.quantities)}  skus: {data.sku_count}")


def main() -> None:
    user_key = os.getenv("CHAT_USER_KEY", "local_user_1")
    store = MemoryConversationStore()
    platform = MockWhatsAppPlatform()
    use_case = HandleIncomingMessageUseCase(
        store=store,
        flow=build_flow(get_catalog()),
        extractor=get_extractor(),
        send_reply=SendReplyUseCase(platform=platform, auto_reply_enabled=True),
    )
    _print_header(user_key)

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
            print("  /new   -> start as a new user (fresh conversation)")
            print("  /state -> show what has been collected so far")
            print("  /quit  -> exit")
            continue
        if cmd == "/new":
            user_key = f"local_user_{int(time.time())}"
            print(f"New user_key: {user_key}")
            continue
        if cmd == "/state":
            _print_state(store, user_key)
            continue

        message = Message(
            id=f"local_{int(time.time() * 1000)}",
            user_key=user_key,
            text=user_text,
            timestamp=int(time.time()),
            platform="local",
        )
        reply = use_case.handle(message)

        state = store.get_state(user_key)
        print(f"\n--- Step: {state.step.value if state else 'n/a'} ---")
        print(reply.strip() if reply else "(no reply)")
        print("-" * 60)


if __name__ == "__main__":
    main()
