#!/usr/bin/env python3
"""
Create a member in the Trip Planner SQLite database from the command line.

Useful for bootstrapping a deployment or a local database before any
client has registered.  Migrations are applied first, so this also
works on a fresh database file.

Usage:
    python seed_member.py --db ./trip_planner_api/trip_planner.db --login-id traveller01 --name "Kim Minji"

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import asyncio
import getpass
import os
import sys


def main():
    ap = argparse.ArgumentParser(description="Create a Trip Planner member (SQLite).")
    ap.add_argument("--db", help="Path to SQLite DB file. Defaults to DATABASE_URL or trip_planner.db.")
    ap.add_argument("--login-id", required=True, help="Login ID of the new member")
    ap.add_argument("--name", required=True, help="Display name of the new member")
    ap.add_argument("--password", help="Password. If omitted, you'll be prompted securely.")
    args = ap.parse_args()

    if args.db:
        # Settings are read at import time.
        os.environ["DATABASE_URL"] = os.path.abspath(args.db)

    from trip_planner_api.app.core.db import init_db
    from trip_planner_api.app.core.errors import ConflictError
    from trip_planner_api.app.schemas.member import MemberCreate
    from trip_planner_api.app.services.member_service import MemberService

    password = args.password or getpass.getpass("Enter password: ")
    if not password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        sys.exit(1)

    init_db()
    try:
        member = asyncio.run(
            MemberService.register(MemberCreate(login_id=args.login_id, name=args.name, password=password))
        )
    except ConflictError as e:
        print(f"[!] {e.message}", file=sys.stderr)
        sys.exit(1)
    print(f"[+] Created member {member.login_id} ({member.id})")


if __name__ == "__main__":
    main()
