#!/usr/bin/env python3
"""
Create an admin account, or reset its password, in the salon MongoDB database.

This script DOES NOT read or reveal any existing passwords.  It stores a
new password hash (PBKDF2-HMAC-SHA256, format "salthex$hashhex") for the
given email, creating the admin if it does not exist yet.

Usage:
    python create_admin.py --email admin@salon.com --password "NewStrongPass!234"
    python create_admin.py --uri mongodb://localhost:27017 --db salon-booking --email admin@salon.com

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import getpass
import sys

from pymongo.errors import PyMongoError

from salon_booking_api.app.core.config import Settings, settings
from salon_booking_api.app.core.db import MongoGateway, utcnow
from salon_booking_api.app.core.security import hash_password


def main() -> None:
    ap = argparse.ArgumentParser(description="Create or reset a salon admin account.")
    ap.add_argument("--uri", default=settings.mongodb_uri, help="MongoDB connection string")
    ap.add_argument("--db", default=settings.mongodb_name, help="Database name")
    ap.add_argument("--email", required=True, help="Admin email")
    ap.add_argument("--password", help="New password. If omitted, you'll be prompted securely.")
    args = ap.parse_args()

    new_password = args.password or getpass.getpass("Enter NEW password: ")
    if len(new_password) < 6:
        print("[!] Password must be at least 6 characters.", file=sys.stderr)
        sys.exit(1)

    gateway = MongoGateway.connect(Settings(mongodb_uri=args.uri, mongodb_name=args.db))
    try:
        now = utcnow()
        result = gateway.admin_users.update_one(
            {"email": args.email},
            {
                "$set": {"password": hash_password(new_password), "updatedAt": now},
                "$setOnInsert": {"role": "admin", "createdAt": now},
            },
            upsert=True,
        )
    except PyMongoError as exc:
        print(f"[!] Database error: {exc}", file=sys.stderr)
        sys.exit(2)
    finally:
        gateway.close()

    if result.upserted_id is not None:
        print(f"[+] Admin created: {args.email}")
    else:
        print(f"[+] Password updated for admin: {args.email}")


if __name__ == "__main__":
    main()
