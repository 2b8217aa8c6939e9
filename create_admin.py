#!/usr/bin/env python3
"""
Create an admin account, or reset its password, in the SQLite database.

The API's ``/api/register`` is only open on an empty database; use this
script to seed the first admin on a server or to recover access.  It
never reads or prints existing password hashes.

Usage:
    python create_admin.py --username admin --password "NewStrongPass!234"
    python create_admin.py --db /srv/roster/artist_roster.db --username admin

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import sys

from artist_roster_api.app.core.config import settings
from artist_roster_api.app.core.db import get_connection, get_database_path, init_db
from artist_roster_api.app.core.security import hash_password


def main() -> None:
    ap = argparse.ArgumentParser(description="Create or reset an Artist Roster admin.")
    ap.add_argument("--db", default=settings.database_url, help="SQLite database path (default: DATABASE_URL)")
    ap.add_argument("--username", required=True, help="Admin username")
    ap.add_argument("--password", help="Password. If omitted, you'll be prompted securely.")
    args = ap.parse_args()

    password = args.password or getpass.getpass("Enter password: ")
    if not password:
        print("[!] Empty password is not allowed.", file=sys.stderr)
        sys.exit(1)

    init_db(args.db)
    hashed = hash_password(password)

    conn = get_connection(args.db)
    try:
        cur = conn.cursor()
        row = cur.execute("SELECT id FROM admins WHERE username = ?", (args.username,)).fetchone()
        if row:
            cur.execute("UPDATE admins SET password = ? WHERE id = ?", (hashed, row["id"]))
            action = "Password reset"
        else:
            cur.execute("INSERT INTO admins (username, password) VALUES (?, ?)", (args.username, hashed))
            action = "Created admin"
        conn.commit()
        print(f"[+] {action}: {args.username} ({get_database_path(args.db)})")
    finally:
        conn.close()


if __name__ == "__main__":
    main()
