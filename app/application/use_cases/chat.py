from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from app.application.exceptions import LLMContractError, LLMUpstreamError
from app.application.ports.llm import LLMPort
from app.application.ports.service_catalog import ServiceCataloguePort
from app.application.use_cases.availability import GetAvailabilityUseCase
from app.application.use_cases.booking import BookAppointmentUseCase
from app.application.use_cases.catalogue import GetCatalogueUseCase
from app.application.utils.slot_parser import parse_iso_timestamp
from app.application.utils.state_helpers import (
    present_booking,
    record_booking,
    select_service,
    select_slot,
)
from app.domain.entities.booking import BookingMetadata, BookingRequest
from app.domain.entities.booking_state import COMPLETED
from app.domain.entities.conversation_state import ConversationState
from app.domain.entities.reply import Reply, ToolCall
from app.domain.entities.slot import Slot
from app.infrastructure.llm.prompts import (
    BOOK_APPOINTMENT,
    GET_AVAILABILITY,
    GET_SERVICES_CATALOGUE,
    TOOL_SCHEMAS,
    build_system_prompt,
)

FALLBACK_REPLY = "Sorry, I couldn't complete that request. Please try again."
UNAVAILABLE_REPLY = "Sorry, the booking assistant is unavailable right now. Please try again shortly."
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


@dataclass(frozen=True)
class ChatTurn:
    text: str
    state: ConversationState
    tools_called: tuple[str, ...] = field(default_factory=tuple)


class SalonChatUseCase:
    """
    Drives one conversation turn: sends the history to the model, runs any
    tools it asks for, feeds the results back, and repeats until the model
    answers in plain text or the round limit is hit.
    """

    def __init__(
        self,
        llm: LLMPort,
        catalogue: GetCatalogueUseCase,
        availability: GetAvailabilityUseCase,
        booking: BookAppointmentUseCase,
        service_catalogue: ServiceCataloguePort,
        business_name: str,
        max_tool_rounds: int = 5,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._llm = llm
        self._catalogue = catalogue
        self._availability = availability
        self._booking = booking
        self._service_catalogue = service_catalogue
        self._business_name = business_name
        self._max_tool_rounds = max_tool_rounds
        self._now = now or (lambda: datetime.now(timezone.utc))
        self._logger = logging.getLogger(__name__)

    def respond(
        self,
        messages: list[dict[str, Any]],
        state: ConversationState | None = None,
    ) -> ChatTurn:
        pieces: list[str] = []
        tools: list[str] = []
        current = state or ConversationState()
        for text, current, tool_name in self._run(messages, current):
            if text:
                pieces.append(text)
            if tool_name:
                tools.append(tool_name)
        return ChatTurn(text="\n\n".join(pieces), state=current, tools_called=tuple(tools))

    def stream(self, messages: list[dict[str, Any]]) -> Iterator[str]:
        first = True
        for text, _, _ in self._run(messages, ConversationState()):
            if not text:
                continue
            yield text if first else f"\n\n{text}"
            first = False

    def _run(
        self,
        messages: list[dict[str, Any]],
        state: ConversationState,
    ) -> Iterator[tuple[str | None, ConversationState, str | None]]:
        history: list[dict[str, Any]] = [
            {"role": "system", "content": build_system_prompt(self._business_name, self._now())},
            *[_clean_message(m) for m in messages],
        ]

        for round_no in range(self._max_tool_rounds + 1):
            # The last call gets no tools, so tool executions never exceed the limit.
            last_call = round_no == self._max_tool_rounds
            try:
                reply = self._llm.complete(history, [] if last_call else TOOL_SCHEMAS)
            except (LLMUpstreamError, LLMContractError) as e:
                self._logger.error("Chat completion failed", extra={"error": str(e)})
                yield _fallback_reply(UNAVAILABLE_REPLY, state), state, None
                return

            if reply.text:
                yield reply.text, state, None
            if not reply.wants_tools:
                return
            if last_call:
                break

            history.append(_assistant_message(reply))
            for call in reply.tool_calls:
                result, state = self._execute_tool(call, state)
                history.append(
                    {
                        "role": "tool",
                        "tool_call_id": call.id,
                        "content": json.dumps(result),
                    }
                )
                yield None, state, call.name

        self._logger.warning("Tool round limit reached", extra={"reason": "max_tool_rounds"})
        yield _fallback_reply(FALLBACK_REPLY, state), state, None

    def _execute_tool(
        self,
        call: ToolCall,
        state: ConversationState,
    ) -> tuple[dict[str, Any], ConversationState]:
        self._logger.info("Tool call", extra={"tool": call.name})
        state = replace(state, last_tool=call.name)
        args = call.arguments

        if call.name == GET_SERVICES_CATALOGUE:
            return self._catalogue.execute().to_dict(), state

        if call.name == GET_AVAILABILITY:
            start, end = args.get("start"), args.get("end")
            if not start or not end:
                return _tool_error("Missing required parameters: start and end"), state
            if not _is_iso_timestamp(start) or not _is_iso_timestamp(end):
                return _tool_error("start and end must be ISO 8601 timestamps"), state
            result = self._availability.execute(
                start=str(start),
                end=str(end),
                username=args.get("username"),
                event_type_slug=args.get("eventTypeSlug"),
            )
            return result.to_dict(), state

        if call.name == BOOK_APPOINTMENT:
            return self._book(args, state)

        return _tool_error(f"Unknown tool: {call.name}"), state

    def _book(self, args: dict[str, Any], state: ConversationState) -> tuple[dict[str, Any], ConversationState]:
        try:
            request = _booking_request(args)
        except (KeyError, TypeError, ValueError) as e:
            return _tool_error(f"Invalid booking details: {e}"), state

        found = self._service_catalogue.find_service(request.metadata.service)
        if found is not None:
            category, service = found
            if state.selected_service != service:
                state = select_service(state, category, service)
        state = select_slot(state, Slot(time=request.start))
        state = present_booking(state, request)

        if args.get("action") == "reject":
            attempt = self._booking.cancel(state.booking)
        else:
            attempt = self._booking.confirm(state.booking)
        state = record_booking(state, attempt)
        return attempt.result.to_dict(), state


def _booking_request(args: dict[str, Any]) -> BookingRequest:
    metadata = args["metadata"]
    if not isinstance(metadata, dict):
        raise TypeError("metadata must be an object")
    for key in ("start", "name", "email"):
        if not args.get(key):
            raise ValueError(f"{key} is required")
    if not _is_iso_timestamp(args["start"]):
        raise ValueError("start must be an ISO 8601 timestamp")
    if not EMAIL_PATTERN.fullmatch(str(args["email"]).strip()):
        raise ValueError("email is not a valid email address")
    return BookingRequest(
        start=str(args["start"]),
        name=str(args["name"]),
        email=str(args["email"]),
        phone_number=args.get("phoneNumber") or None,
        metadata=BookingMetadata(
            service=str(metadata["service"]),
            price=str(metadata.get("price", "")),
            duration=str(metadata.get("duration", "")),
        ),
    )


def _clean_message(message: dict[str, Any]) -> dict[str, Any]:
    return {"role": message.get("role", "user"), "content": message.get("content") or ""}


def _assistant_message(reply: Reply) -> dict[str, Any]:
    return {
        "role": "assistant",
        "content": reply.text,
        "tool_calls": [
            {
                "id": call.id,
                "type": "function",
                "function": {"name": call.name, "arguments": json.dumps(call.arguments)},
            }
            for call in reply.tool_calls
        ],
    }


def _tool_error(message: str) -> dict[str, Any]:
    return {"status": "error", "message": message}


def _is_iso_timestamp(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        parse_iso_timestamp(value)
    except ValueError:
        return False
    return True


def _fallback_reply(base: str, state: ConversationState) -> str:
    # A booking made earlier in the turn stands; never tell the client to book again.
    booking = state.booking
    if booking is not None and booking.status == COMPLETED and booking.result is not None:
        return f"{booking.result.message} (booking reference: {booking.result.uid})"
    return base
