#!/usr/bin/env python3
"""
Operator CLI for a running Teams Meeting Bot service.

Usage:
    python scripts/join_meeting.py join "<Teams join link>"
    python scripts/join_meeting.py state <call-id>
    python scripts/join_meeting.py hangup <call-id>
    python scripts/join_meeting.py transcript "<Teams join link>" [-o meeting.vtt]

Reads BOT_SERVICE_URL (default http://localhost:3000) and API_KEY from
the environment or .env.
"""

import argparse
import json
import os
import sys

import requests
from dotenv import load_dotenv

load_dotenv()

SERVICE_URL = os.getenv("BOT_SERVICE_URL", "http://localhost:3000").rstrip("/")
API_KEY = os.getenv("API_KEY", "")


def _print_response(response: requests.Response) -> int:
    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text)
    return 0 if response.ok else 1


def join(args, headers: dict) -> int:
    body = {"joinLink": args.join_link}
    if args.organizer:
        body["organizerIdentity"] = args.organizer
    response = requests.post(f"{SERVICE_URL}/join", json=body, headers=headers, timeout=60)
    return _print_response(response)


def state(args, headers: dict) -> int:
    response = requests.get(f"{SERVICE_URL}/call/{args.call_id}", headers=headers, timeout=30)
    return _print_response(response)


def hangup(args, headers: dict) -> int:
    response = requests.post(
        f"{SERVICE_URL}/call/{args.call_id}/hangup", headers=headers, timeout=30
    )
    return _print_response(response)


def transcript(args, headers: dict) -> int:
    response = requests.get(
        f"{SERVICE_URL}/transcripts",
        params={"joinLink": args.join_link},
        headers=headers,
        timeout=60,
    )
    if not response.ok:
        return _print_response(response)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(response.text)
        print(f"✅ Transcript saved to {args.output}")
    else:
        print(response.text)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Teams Meeting Bot operator CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    join_parser = sub.add_parser("join", help="Join the bot into a meeting")
    join_parser.add_argument("join_link")
    join_parser.add_argument("--organizer", help="Organizer object id, a GUID (skips link parsing)")
    join_parser.set_defaults(func=join)

    state_parser = sub.add_parser("state", help="Show call state")
    state_parser.add_argument("call_id")
    state_parser.set_defaults(func=state)

    hangup_parser = sub.add_parser("hangup", help="Hang up a call")
    hangup_parser.add_argument("call_id")
    hangup_parser.set_defaults(func=hangup)

    transcript_parser = sub.add_parser("transcript", help="Download latest transcript")
    transcript_parser.add_argument("join_link")
    transcript_parser.add_argument("-o", "--output", help="Write WebVTT to this file")
    transcript_parser.set_defaults(func=transcript)

    args = parser.parse_args()

    if not API_KEY:
        print("❌ API_KEY not set")
        return 1

    return args.func(args, {"X-API-Key": API_KEY})


if __name__ == "__main__":
    sys.exit(main())
