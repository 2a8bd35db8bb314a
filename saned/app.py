import argparse
import json
from pathlib import Path

from . import __version__
from .config import load_settings
from .database import init_database, get_session
from .errors import NotFoundError
from .logger import get_logger
from .match_store import MatchStore, SETTABLE_PREFERENCES
from .repositories import MatchRepository, UserDirectory
from .roles import display_name
from .schema import validate_profile, validate_profile_strict, profile_to_user


def _db_path(args: argparse.Namespace) -> Path:
    return Path(args.db) if args.db else load_settings().db_path


def _open_store(args: argparse.Namespace):
    db_path = _db_path(args)
    if not db_path.exists():
        raise SystemExit(f"Database not found: {db_path}. Run 'saned init-db' first.")
    session = get_session(db_path)
    return session, MatchStore(UserDirectory(session), MatchRepository(session))


def _load_json(path_str: str):
    input_path = Path(path_str)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _print_match(match, name: str) -> None:
    print(f"[{match.preference}] {name} ({match.target_user_id})")
    print(f"  Score: {match.match_score:.0f}")
    if match.shared_tags:
        print(f"  Shared tags: {', '.join(match.shared_tags)}")
    print(f"  {match.highlight}")


def cmd_init_db(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    init_database(db_path)
    print(f"Database ready: {db_path}")


def cmd_validate(args: argparse.Namespace) -> None:
    profile = _load_json(args.input)
    is_valid, errors = validate_profile_strict(profile)
    if not is_valid:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def import_profiles(profiles: list, users: UserDirectory) -> dict:
    """
    Insert profiles that pass validation and are not already present by email.

    Returns:
        Counts keyed by outcome: new, existing, invalid
    """
    counts = {"new": 0, "existing": 0, "invalid": 0}
    for profile in profiles:
        label = profile.get("email") if isinstance(profile, dict) else repr(profile)
        errors = validate_profile(profile) if isinstance(profile, dict) else ["Profile must be an object"]
        if errors:
            print(f"[invalid] {label} - {errors}")
            counts["invalid"] += 1
            continue
        if users.find_by_email(profile["email"].strip()) is not None:
            print(f"[existing] {label}")
            counts["existing"] += 1
            continue
        user = users.add(profile_to_user(profile))
        print(f"[new] {user.email} ({user.id})")
        counts["new"] += 1
    return counts


def cmd_import_users(args: argparse.Namespace) -> None:
    data = _load_json(args.input)
    profiles = data if isinstance(data, list) else [data]
    db_path = _db_path(args)
    init_database(db_path)
    session = get_session(db_path)
    try:
        counts = import_profiles(profiles, UserDirectory(session))
    finally:
        session.close()
    print(f"Done. new={counts['new']} existing={counts['existing']} invalid={counts['invalid']}")


def cmd_list_users(args: argparse.Namespace) -> None:
    session, store = _open_store(args)
    try:
        users = store.users.list_all()
        if not users:
            print("No users in database.")
            return
        print(f"Found {len(users)} users:\n")
        for user in users:
            print(f"ID: {user.id}")
            print(f"  Name: {user.first_name} {user.last_name}".rstrip())
            print(f"  Role: {display_name(user.role)}")
            print(f"  Organization: {user.organization}")
            print(f"  Location: {user.location}")
            print(f"  Tags: {', '.join(user.tags or [])}")
            print()
    finally:
        session.close()


def cmd_matches(args: argparse.Namespace) -> None:
    session, store = _open_store(args)
    try:
        matches = store.find_potential_matches(args.user)
        if not matches:
            print("No potential matches.")
            return
        print(f"Top {len(matches)} matches for {args.user}:\n")
        for match in matches:
            target = store.users.find_by_id(match.target_user_id)
            _print_match(match, f"{target.first_name} {target.last_name}".strip())
    except NotFoundError as e:
        raise SystemExit(str(e))
    finally:
        session.close()


def cmd_prefer(args: argparse.Namespace) -> None:
    session, store = _open_store(args)
    try:
        match = store.set_preference(args.user, args.target, args.preference)
        print(f"Saved: {match.user_id} -> {match.target_user_id} = {match.preference}")
    except NotFoundError as e:
        raise SystemExit(str(e))
    finally:
        session.close()


def cmd_history(args: argparse.Namespace) -> None:
    session, store = _open_store(args)
    try:
        history = store.get_match_history(args.user)
        if not history:
            print("No match history.")
            return
        for match in history:
            target = match.target_user
            print(f"{match.created_at.isoformat(timespec='seconds')}")
            _print_match(match, f"{target.first_name} {target.last_name}".strip())
    except NotFoundError as e:
        raise SystemExit(str(e))
    finally:
        session.close()


def main(argv=None):
    settings = load_settings()
    logger = get_logger(
        level=settings.log_level,
        log_dir=settings.log_dir,
        enable_file=settings.log_to_file,
    )

    parser = argparse.ArgumentParser(prog="saned", description="Saned matching CLI")
    parser.add_argument("--version", action="store_true", help="Show version")

    db_parent = argparse.ArgumentParser(add_help=False)
    db_parent.add_argument("--db", help=f"Path to SQLite database (default: {settings.db_path})")

    subparsers = parser.add_subparsers(dest="command")
    ini = subparsers.add_parser("init-db", parents=[db_parent], help="Create database tables")
    ini.set_defaults(func=cmd_init_db)

    val = subparsers.add_parser("validate", help="Validate a profile JSON")
    val.add_argument("--input", required=True, help="Path to profile JSON input")
    val.set_defaults(func=cmd_validate)

    imp = subparsers.add_parser("import-users", parents=[db_parent], help="Import profiles from a JSON file (object or list)")
    imp.add_argument("--input", required=True, help="Path to profiles JSON input")
    imp.set_defaults(func=cmd_import_users)

    lst = subparsers.add_parser("list-users", parents=[db_parent], help="List all users")
    lst.set_defaults(func=cmd_list_users)

    mat = subparsers.add_parser("matches", parents=[db_parent], help="Compute and store potential matches for a user")
    mat.add_argument("--user", required=True, help="Subject user id")
    mat.set_defaults(func=cmd_matches)

    pre = subparsers.add_parser("prefer", parents=[db_parent], help="Like or dislike a candidate")
    pre.add_argument("--user", required=True, help="Subject user id")
    pre.add_argument("--target", required=True, help="Candidate user id")
    pre.add_argument("--preference", required=True, choices=list(SETTABLE_PREFERENCES))
    pre.set_defaults(func=cmd_prefer)

    his = subparsers.add_parser("history", parents=[db_parent], help="Show stored matches, newest first")
    his.add_argument("--user", required=True, help="Subject user id")
    his.set_defaults(func=cmd_history)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        logger.debug("Command finished", command=args.command, metrics=logger.get_metrics())
        return

    parser.print_help()


if __name__ == "__main__":
    main()
