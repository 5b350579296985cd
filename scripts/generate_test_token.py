#!/usr/bin/env python3
"""Generate a signed token for manual API testing.

Usage: generate_test_token.py USER_ID [learner|teacher]
"""
import sys

from skillswap.core.auth import Role, create_access_token


def main(argv: list[str]) -> int:
    if not argv:
        print(__doc__)
        return 1

    user_id = argv[0]
    role = argv[1] if len(argv) > 1 else Role.LEARNER.value
    if not Role.contains(role):
        print(f"Unknown role: {role}")
        return 1

    token = create_access_token(user_id, role=role)
    print(f"{role.title()} token for {user_id}:\n{token}")
    print(f"\ncurl -H 'Authorization: Bearer {token}' http://localhost:3000/api/v1/user/me")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
