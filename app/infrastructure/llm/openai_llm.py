from __future__ import annotations

import json
from typing import Any

from openai import OpenAI

from app.application.exceptions import LLMContractError, LLMUpstreamError
from app.application.ports.llm import LLMPort
from app.core.config import settings
from app.domain.entities.reply import Reply, ToolCall


class OpenAILLM(LLMPort):
    """
    OpenAI-backed adapter implementing LLMPort.

    Contract guarantees:
    - complete returns a Reply with text and/or decoded tool calls
    - Raises:
        LLMUpstreamError: networking/provider failures
        LLMContractError: empty answer or tool arguments that are not a JSON object
    """

    def __init__(self, model: str | None = None, temperature: float | None = None) -> None:
        self.client = OpenAI(api_key=settings.OPENAI_API_KEY)
        self._model = model or settings.OPENAI_MODEL_CHAT
        self._temperature = settings.OPENAI_TEMPERATURE_CHAT if temperature is None else temperature

    def complete(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]],
    ) -> Reply:
        kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": messages,
            "temperature": self._temperature,
            "max_tokens": 1400,
        }
        if tools:
            kwargs["tools"] = tools

        try:
            resp = self.client.chat.completions.create(**kwargs)
        except Exception as e:
            raise LLMUpstreamError(f"OpenAI API error: {e}") from e

        if not resp.choices:
            raise LLMContractError("LLM returned no choices.")
        message = resp.choices[0].message

        calls: list[ToolCall] = []
        for call in message.tool_calls or []:
            calls.append(
                ToolCall(
                    id=call.id,
                    name=call.function.name,
                    arguments=_parse_arguments(call.function.arguments, call.function.name),
                )
            )

        text = (message.content or "").strip() or None
        if text is None and not calls:
            raise LLMContractError("LLM returned empty response text.")

        return Reply(text=text, tool_calls=tuple(calls))


def _parse_arguments(raw: str | None, tool_name: str) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except Exception:
        snippet = raw[:200].replace("\n", " ")
        raise LLMContractError(f"{tool_name}: invalid JSON arguments. Snippet: {snippet!r}")
    if not isinstance(data, dict):
        raise LLMContractError(f"{tool_name}: arguments must be a JSON object.")
    return data
