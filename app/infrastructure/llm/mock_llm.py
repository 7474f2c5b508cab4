from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from app.application.ports.llm import LLMPort
from app.domain.entities.reply import Reply, ToolCall
from app.infrastructure.llm.prompts import GET_AVAILABILITY, GET_SERVICES_CATALOGUE


class MockLLM(LLMPort):
    """Keyword-driven stand-in used when no OpenAI key is configured."""

    def __init__(self, now: Callable[[], datetime] | None = None) -> None:
        self._now = now or (lambda: datetime.now(timezone.utc))
        self._calls = 0

    def complete(self, messages: list[dict[str, Any]], tools: list[dict[str, Any]]) -> Reply:
        if not messages:
            return Reply(text="Hi! How can I help you with your salon appointment?")

        last = messages[-1]
        if last.get("role") == "tool":
            return Reply(text=_summarize_tool_result(last.get("content") or ""))

        normalized = str(last.get("content") or "").lower()
        if any(word in normalized for word in ("service", "menu", "price", "offer", "haircut", "color")):
            return Reply(text=None, tool_calls=(self._call(GET_SERVICES_CATALOGUE, {}),))

        if any(word in normalized for word in ("available", "availability", "slot", "tomorrow", "opening")):
            day = (self._now() + timedelta(days=1)).date()
            args = {
                "start": f"{day.isoformat()}T09:00:00Z",
                "end": f"{day.isoformat()}T19:00:00Z",
            }
            return Reply(text=None, tool_calls=(self._call(GET_AVAILABILITY, args),))

        return Reply(
            text="Hi! I can show you our services, check availability, and book an appointment."
        )

    def _call(self, name: str, arguments: dict[str, Any]) -> ToolCall:
        self._calls += 1
        return ToolCall(id=f"mock_call_{self._calls}", name=name, arguments=arguments)


def _summarize_tool_result(content: str) -> str:
    try:
        data = json.loads(content)
    except ValueError:
        return content
    if not isinstance(data, dict):
        return content

    if data.get("status") in ("error", "failed"):
        return data.get("message") or "Something went wrong. Please try again."

    if "catalogue" in data:
        lines = ["Here are our services:"]
        for category in data["catalogue"]:
            names = ", ".join(f"{s['service']} ({s['price']})" for s in category["services"])
            lines.append(f"- {category['category']}: {names}")
        return "\n".join(lines)

    if "availableSlots" in data:
        slots = data["availableSlots"]
        if not slots:
            return "Sorry, there are no open slots in that range."
        preview = ", ".join(s["time"] for s in slots[:5])
        return f"I found {len(slots)} open slots (UTC): {preview}"

    return data.get("message") or "Done."
