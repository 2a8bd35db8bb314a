#!/usr/bin/env python3
"""
Seed the database with user profiles from a JSON file.

Usage:
    python scripts/seed_users.py --input data/seed_users.json --db data/saned.db
    python scripts/seed_users.py --input data/seed_users.json --dry-run
"""

import argparse
import json
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from saned.database import init_database, get_session
from saned.repositories import UserDirectory
from saned.app import import_profiles
from saned.schema import validate_profile


def seed(input_path: Path, db_path: Path, dry_run: bool = False) -> bool:
    """
    Insert every valid profile whose email is not already present.

    Returns True if all profiles were valid, False otherwise.
    """
    print(f"Loading profiles from {input_path}...")
    with open(input_path, encoding="utf-8") as f:
        profiles = json.load(f)
    print(f"Found {len(profiles)} profiles")

    invalid = [(p.get("email"), validate_profile(p)) for p in profiles]
    invalid = [(email, errors) for email, errors in invalid if errors]
    for email, errors in invalid:
        print(f"⚠️  Invalid profile {email}: {'; '.join(errors)}")

    if dry_run:
        print("\n[DRY RUN] Would seed the following users:")
        for i, profile in enumerate(profiles[:5], 1):
            print(f"  {i}. {profile.get('email')}: {profile.get('role')} - {profile.get('organization')}")
        if len(profiles) > 5:
            print(f"  ... and {len(profiles) - 5} more")
        return not invalid

    print(f"\nInitializing database at {db_path}...")
    init_database(db_path)
    session = get_session(db_path)

    try:
        counts = import_profiles(profiles, UserDirectory(session))
    finally:
        session.close()

    print(f"\n✅ Seeding complete!")
    print(f"   New:      {counts['new']}")
    print(f"   Existing: {counts['existing']}")
    print(f"   Invalid:  {counts['invalid']}")
    return counts["invalid"] == 0


def main():
    parser = argparse.ArgumentParser(description="Seed Saned user profiles")
    parser.add_argument("--input", required=True, help="Path to JSON list of profiles")
    parser.add_argument("--db", default="data/saned.db", help="Path to SQLite database")
    parser.add_argument("--dry-run", action="store_true", help="Validate and preview without writing")
    args = parser.parse_args()

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"❌ Input file not found: {input_path}")
        sys.exit(1)

    ok = seed(input_path, Path(args.db), dry_run=args.dry_run)
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
