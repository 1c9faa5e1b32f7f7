# src/quotes_decode/scripts/tokens.py
"""Mint development access tokens for the local data API.

The hosted identity service issues real tokens after an OAuth sign-in; this
script stands in for it so the client can be exercised locally:

    python -m quotes_decode.scripts.tokens --user-id u-1 --email ada@example.com \
        --full-name "Ada Lovelace"
"""

from __future__ import annotations

import argparse
import uuid

from quotes_decode.api.v1.endpoints.auth import create_access_token


def build_metadata(full_name: str | None, picture: str | None) -> dict[str, str]:
    """Return the user_metadata claims the client derives its identity from."""
    metadata: dict[str, str] = {}
    if full_name:
        metadata["full_name"] = full_name
    if picture:
        metadata["picture"] = picture
    return metadata


def main() -> None:
    parser = argparse.ArgumentParser(description="Mint a development access token")
    parser.add_argument("--user-id", default=None, help="Subject claim (defaults to a new UUID)")
    parser.add_argument("--email", default=None, help="Email claim")
    parser.add_argument("--full-name", default=None, help="user_metadata.full_name claim")
    parser.add_argument("--picture", default=None, help="user_metadata.picture claim")
    parser.add_argument(
        "--expires-minutes",
        type=int,
        default=None,
        help="Token lifetime (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    args = parser.parse_args()

    token = create_access_token(
        args.user_id or str(uuid.uuid4()),
        email=args.email,
        user_metadata=build_metadata(args.full_name, args.picture),
        expires_minutes=args.expires_minutes,
    )
    print(token)


if __name__ == "__main__":
    main()
