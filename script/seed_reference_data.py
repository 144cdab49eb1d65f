"""
seed_reference_data.py

Populate meal categories/presets, exercise presets and column categories,
and optionally create an admin account for writing columns.

    python script/seed_reference_data.py
    python script/seed_reference_data.py --admin-email admin@example.com --admin-password 'change-me-please'
"""

import argparse

from healthtrack import create_app
from healthtrack.reference_data import seed_reference_data


def parse_args():
    parser = argparse.ArgumentParser(description="Seed healthtrack reference data")
    parser.add_argument("--admin-email", help="create an admin with this email if missing")
    parser.add_argument("--admin-username", help="username for the admin (default: email local part)")
    parser.add_argument("--admin-password", help="password for the admin")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    if args.admin_email and not args.admin_password:
        raise SystemExit("--admin-password is required with --admin-email")

    app = create_app()
    with app.app_context():
        try:
            created = seed_reference_data(
                admin_email=args.admin_email,
                admin_username=args.admin_username,
                admin_password=args.admin_password,
            )
        except ValueError as e:
            raise SystemExit(f"[ERROR] {e}")

    for key, count in created.items():
        print(f"[INFO] {key}: {count} created")
    print("[DONE] Reference data ready.")
