#!/usr/bin/env python3
"""
Generate an API key for the Teams Meeting Bot API.

Usage:
    python scripts/generate_api_key.py

The generated key should be added to your .env file (or App Service
environment variables):
    API_KEY=<key>
"""

import secrets


def generate_api_key(length: int = 32) -> str:
    """Generate a secure random API key."""
    return secrets.token_urlsafe(length)


def main():
    key = generate_api_key()

    print()
    print("🔑 Generated API Key")
    print("=" * 50)
    print(f"API Key:  {key}")
    print()
    print("Add to your .env file:")
    print()
    print(f"  API_KEY={key}")
    print()
    print("Usage in requests:")
    print(f"  curl -H 'X-API-Key: {key}' https://your-bot.example.com/debug/env")
    print()


if __name__ == "__main__":
    main()
