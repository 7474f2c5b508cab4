from abc import ABC, abstractmethod
from typing import Any

from app.domain.entities.reply import Reply


class LLMPort(ABC):
    @abstractmethod
    def complete(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]],
    ) -> Reply:
        """
        Run one chat completion turn.

        Requirements:
        - `messages` are OpenAI-style chat messages, including prior tool results
        - `tools` are function tool schemas the model may call
        - Return a Reply with either text, tool calls, or both
        - Tool call arguments must already be decoded into a dict

        Raises:
            LLMUpstreamError: provider unreachable or erroring
            LLMContractError: provider answered with something we cannot use
        """
        raise NotImplementedError
