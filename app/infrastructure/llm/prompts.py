from __future__ import annotations

from datetime import datetime

GET_SERVICES_CATALOGUE = "getServicesCatalogue"
GET_AVAILABILITY = "getCalComAvailability"
BOOK_APPOINTMENT = "bookCalComAppointment"


def build_system_prompt(business_name: str, now: datetime) -> str:
    return (
        f"You are a professional booking assistant for {business_name}, a hair salon.\n"
        "Your responsibilities include:\n"
        "  - Helping clients book appointments for salon services\n"
        "  - Answering questions about salon services and pricing\n"
        "  - Checking availability and confirming appointment details\n"
        "  - Maintaining a professional and courteous demeanor at all times\n"
        "\n"
        "How to work:\n"
        f"  1. Use {GET_SERVICES_CATALOGUE} to show services. Never invent services or prices.\n"
        f"  2. Once a service is chosen, use {GET_AVAILABILITY} with an ISO 8601 UTC range "
        "(e.g. 09:00 to 19:00 on the requested day).\n"
        "  3. Offer only slots the tool returned. Times are in UTC.\n"
        "  4. Collect the client's name, email and (optionally) phone number.\n"
        "  5. Read back service, price, date and time, and ask the client to confirm.\n"
        f"  6. Call {BOOK_APPOINTMENT} with action=\"confirm\" only after an explicit yes; "
        "call it with action=\"reject\" if the client declines.\n"
        "  7. If a tool returns status=error or failed, tell the client the message and offer to try again.\n"
        "\n"
        f"Current date and time (UTC): {now.strftime('%Y-%m-%dT%H:%M:%SZ')}\n"
    )


_METADATA_SCHEMA = {
    "type": "object",
    "properties": {
        "service": {"type": "string", "description": "The salon service being booked"},
        "price": {"type": "string", "description": "Price of the service"},
        "duration": {"type": "string", "description": "Duration of the service"},
    },
    "required": ["service", "price", "duration"],
}

TOOL_SCHEMAS: list[dict] = [
    {
        "type": "function",
        "function": {
            "name": GET_SERVICES_CATALOGUE,
            "description": (
                "Returns all salon services grouped by category, with price, duration "
                "and description for each service."
            ),
            "parameters": {"type": "object", "properties": {}},
        },
    },
    {
        "type": "function",
        "function": {
            "name": GET_AVAILABILITY,
            "description": (
                "Fetches available booking slots from Cal.com within a given time range."
            ),
            "parameters": {
                "type": "object",
                "properties": {
                    "start": {
                        "type": "string",
                        "description": "Start of the search range (ISO 8601).",
                    },
                    "end": {
                        "type": "string",
                        "description": "End of the search range (ISO 8601).",
                    },
                },
                "required": ["start", "end"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": BOOK_APPOINTMENT,
            "description": "Book (or decline) an appointment using the Cal.com API.",
            "parameters": {
                "type": "object",
                "properties": {
                    "action": {
                        "type": "string",
                        "enum": ["confirm", "reject"],
                        "description": "confirm books the slot; reject records that the client declined.",
                    },
                    "start": {"type": "string", "description": "Start time of the booking in ISO 8601 format"},
                    "name": {"type": "string", "description": "Name of the person making the booking"},
                    "email": {"type": "string", "description": "Email of the person making the booking"},
                    "phoneNumber": {"type": "string", "description": "Phone number of the person making the booking"},
                    "metadata": _METADATA_SCHEMA,
                },
                "required": ["action", "start", "name", "email", "metadata"],
            },
        },
    },
]
