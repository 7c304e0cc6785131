import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from quizzhub.adapters.current_user import StaticCurrentUser
from quizzhub.adapters.http_backend import HttpQuizzBackend
from quizzhub.components.quizz_store import QuizzStore, QuizzStoreError
from quizzhub.domain.entities import CacheEntry, Quizz, User
from quizzhub.settings import load_settings

logger = logging.getLogger("cli")


def dump_entries(entries: tuple[CacheEntry, ...] | None) -> str:
    return json.dumps([entry.to_wire() for entry in entries or ()], indent=2)


def find_cached(store: QuizzStore, quizz_id: str) -> Quizz:
    for entry in store.value or ():
        if isinstance(entry, Quizz) and entry.id == quizz_id:
            return entry
    raise LookupError(f"Quizz {quizz_id} not found")


async def run_command(store: QuizzStore, args: argparse.Namespace) -> None:
    command = args.command

    if command == "completed":
        await store.fetch_completed()
    elif command == "popular":
        await store.fetch_by_popularity(args.order)
    else:
        await store.fetch_all()

    if command == "create":
        created = await store.create(args.name, args.description)
        if created is None:
            logger.warning("Backend did not confirm the new quizz.")
    elif command == "comment":
        await store.add_comment(args.text, args.quizz_id)
    elif command in ("like", "unlike", "done", "undone", "hide", "delete"):
        quizz = find_cached(store, args.quizz_id)
        if command == "like":
            await store.like(quizz)
        elif command == "unlike":
            await store.unlike(quizz)
        elif command == "done":
            await store.mark_done(quizz)
        elif command == "undone":
            await store.undo_done(quizz)
        elif command == "hide":
            await store.set_hidden(quizz, not args.show)
        else:
            confirmed = await store.delete(quizz)
            print(f"Deleted: {confirmed}")

    print(dump_entries(store.value))


async def run_with_backend(args: argparse.Namespace) -> None:
    settings = load_settings(Path(args.config) if args.config else None)
    async with HttpQuizzBackend(settings) as backend:
        store = QuizzStore(backend, StaticCurrentUser(User(id=args.user)))
        await run_command(store, args)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="quizzhub CLI")
    parser.add_argument("--config", help="Settings file (default: $QUIZZHUB_CONFIG or quizzhub.yaml)")
    parser.add_argument("--user", required=True, help="Id of the acting user")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="Fetch all quizzes")
    subparsers.add_parser("completed", help="Fetch the user's quizzes flagged realise")

    popular_parser = subparsers.add_parser("popular", help="Fetch the user's quizzes by likes")
    popular_parser.add_argument("--order", choices=["asc", "desc"], default="desc")

    create_parser = subparsers.add_parser("create", help="Create a quizz")
    create_parser.add_argument("name")
    create_parser.add_argument("description")

    for name, help_text in (
        ("like", "Like a quizz"),
        ("unlike", "Remove a like"),
        ("done", "Mark a quizz as done"),
        ("undone", "Undo a done mark"),
        ("delete", "Delete a quizz"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("quizz_id")

    hide_parser = subparsers.add_parser("hide", help="Hide a quizz for the user")
    hide_parser.add_argument("quizz_id")
    hide_parser.add_argument("--show", action="store_true", help="Request unhide instead")

    comment_parser = subparsers.add_parser("comment", help="Comment on a quizz")
    comment_parser.add_argument("quizz_id")
    comment_parser.add_argument("text")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        asyncio.run(run_with_backend(args))
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        return 2
    except LookupError as e:
        logger.error(str(e))
        return 1
    except QuizzStoreError as e:
        logger.error(f"Request failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
