"""
Basic usage example for the Vortex Python client

    export VORTEX_API_KEY=VRTX....
    python examples/basic_usage.py
"""

from vortex_client import VortexError, VortexSettings


def main() -> None:
    with VortexSettings().create_client() as vortex:
        identifiers = [
            {"type": "email", "value": "user@example.com"},
            {"type": "sms", "value": "18008675309"},
        ]
        groups = [
            {"type": "workspace", "groupId": "ws-1", "name": "Main Workspace"},
            {"type": "team", "groupId": "team-1", "name": "Engineering"},
        ]

        print("Generating JWT...")
        jwt = vortex.generate_jwt("user-123", identifiers, groups, role="admin")
        print(f"JWT: {jwt}\n")

        try:
            print("Fetching invitations by email...")
            invitations = vortex.get_invitations_by_target("email", "user@example.com")
            print(f"Found {len(invitations)} invitations")
        except VortexError as e:
            print(f"Error: {e}")


if __name__ == "__main__":
    main()
