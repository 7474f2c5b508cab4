#!/usr/bin/env python3
"""Smoke check for a running server: catalogue, availability, chat."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone

import httpx


BASE_URL = "http://127.0.0.1:8000"


def check_catalogue() -> None:
    print("=" * 60)
    print("GET /services-catalogue")
    print("=" * 60)
    try:
        response = httpx.get(f"{BASE_URL}/services-catalogue", timeout=10.0)
        response.raise_for_status()
        for category in response.json()["catalogue"]:
            print(f"  {category['category']}: {len(category['services'])} services")
    except httpx.HTTPStatusError as e:
        print(f"HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")


def check_availability() -> None:
    print("\n" + "=" * 60)
    print("GET /availability")
    print("=" * 60)
    day = (datetime.now(timezone.utc) + timedelta(days=1)).date().isoformat()
    params = {"start": f"{day}T09:00:00Z", "end": f"{day}T19:00:00Z"}
    response = httpx.get(f"{BASE_URL}/availability", params=params, timeout=30.0)
    data = response.json()
    if response.status_code != 200:
        print(f"HTTP Error: {response.status_code} {data}")
        return
    print(f"  {len(data['availableSlots'])} slots ({data['timeZone']})")
    for slot in data["availableSlots"][:5]:
        print(f"    {slot['time']}")


def check_chat() -> None:
    print("\n" + "=" * 60)
    print("POST /chat")
    print("=" * 60)
    payload = {"messages": [{"role": "user", "content": "What services do you offer?"}]}
    with httpx.stream("POST", f"{BASE_URL}/chat", json=payload, timeout=60.0) as response:
        for chunk in response.iter_text():
            print(chunk, end="", flush=True)
    print()


def main() -> None:
    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
    except httpx.HTTPError:
        print("Server is not running!")
        print("   Please start it with: uvicorn app.main:app --reload")
        sys.exit(1)

    check_catalogue()
    check_availability()
    check_chat()


if __name__ == "__main__":
    main()
