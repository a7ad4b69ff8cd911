#!/usr/bin/env python3
"""Print a bearer token for an existing user id, for manual API testing."""

from __future__ import annotations

import sys

from evalapi.core.auth import TokenService
from evalapi.core.config import get_settings


def main() -> None:
    if len(sys.argv) != 2:
        sys.exit("usage: generate_test_token.py <user-id>")

    token = TokenService(get_settings()).issue(sys.argv[1])
    print(token)


if __name__ == "__main__":
    main()
