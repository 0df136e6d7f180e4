"""Command line interface for Vocab Wizard"""

import argparse
import sys
from collections.abc import Callable
from pathlib import Path

from .config.settings import settings
from .core.card_service import BatchAddResult
from .core.factory import Services, create_services
from .exceptions import VocabWizardError
from .logging_config import get_logger, setup_logging
from .models.card import Card
from .models.deck import Confidence, Deck, Language

logger = get_logger(__name__)

LANGUAGES = [lang.value for lang in Language]


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser"""
    prog_name = Path(sys.argv[0]).name
    parser = argparse.ArgumentParser(
        prog=prog_name,
        description="Vocabulary decks with translation and spaced repetition",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  vocab-wizard deck create Animals --from en --to de --rate 10
  vocab-wizard card add Animals dog cat horse
  vocab-wizard card due Animals
  vocab-wizard card review Animals <card-id> good
  vocab-wizard deck swap Animals     # creates Animals-Reversed
        """,
    )
    parser.add_argument(
        "--user",
        default=settings.storage.default_user,
        help=f"Acting user id (default: {settings.storage.default_user})",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help=f"Directory holding the JSON data files (default: {settings.storage.data_dir})",
    )

    log_group = parser.add_argument_group("logging options")
    log_group.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )
    log_group.add_argument("--debug", action="store_true", help="Enable debug logging")
    log_group.add_argument("--log-file", type=Path, help="Write logs to file")

    commands = parser.add_subparsers(dest="resource", metavar="{deck,card}")
    _add_deck_commands(commands.add_parser("deck", help="Manage decks"))
    _add_card_commands(commands.add_parser("card", help="Manage and review cards"))
    return parser


def _add_deck_commands(deck_parser: argparse.ArgumentParser) -> None:
    sub = deck_parser.add_subparsers(dest="action", metavar="ACTION", required=True)

    create = sub.add_parser("create", help="Create a deck")
    create.add_argument("name")
    create.add_argument("--from", dest="from_lang", choices=LANGUAGES, required=True)
    create.add_argument("--to", dest="to_lang", choices=LANGUAGES, required=True)
    create.add_argument(
        "--rate", dest="learning_rate", type=int, default=10, help="New cards per day"
    )

    sub.add_parser("list", help="List your decks with today's card counts")

    for name, help_text in (
        ("show", "Show a deck"),
        ("stats", "Cards per stage"),
        ("swap", "Create the reversed deck"),
        ("remove", "Remove a deck and its cards"),
    ):
        action = sub.add_parser(name, help=help_text)
        action.add_argument("deck", help="Deck id or name")

    imp = sub.add_parser("import", help="Copy another user's deck")
    imp.add_argument("deck_id")

    rename = sub.add_parser("rename", help="Rename a deck or change its rate")
    rename.add_argument("deck", help="Deck id or name")
    rename.add_argument("name")
    rename.add_argument("--rate", dest="learning_rate", type=int)


def _add_card_commands(card_parser: argparse.ArgumentParser) -> None:
    sub = card_parser.add_subparsers(dest="action", metavar="ACTION", required=True)

    add = sub.add_parser("add", help="Translate words and add them as cards")
    add.add_argument("deck", help="Deck id or name")
    add.add_argument("words", nargs="+")

    for name, help_text in (
        ("list", "List all cards of a deck"),
        ("due", "Cards to review today"),
    ):
        action = sub.add_parser(name, help=help_text)
        action.add_argument("deck", help="Deck id or name")

    review = sub.add_parser("review", help="Record a review outcome")
    review.add_argument("deck", help="Deck id or name")
    review.add_argument("card_id")
    review.add_argument("confidence", choices=[c.value for c in Confidence])

    remove = sub.add_parser("remove", help="Remove a card")
    remove.add_argument("deck", help="Deck id or name")
    remove.add_argument("card_id")


def format_deck(deck: Deck) -> str:
    return (
        f"{deck.name} [{deck.id}] {deck.from_lang.value}->{deck.to_lang.value}, "
        f"{deck.learning_rate} new/day"
    )


def format_card(card: Card) -> str:
    due = card.expires.isoformat() if card.expires else "new"
    phonetic = f" {card.phonetic}" if card.phonetic else ""
    return (
        f"{card.id}  {card.word}{phonetic} = {card.translation}"
        f"  (stage {card.stage}, {due})"
    )


def print_batch_results(result: BatchAddResult) -> None:
    """Print formatted results of adding several words"""
    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(f"Total words processed: {result.total_processed}")
    print(f"Added: {result.successful}")
    print(f"Failed: {result.failed}")

    if result.failed > 0:
        for res in result.results:
            if not res.success:
                print(f"  - {res.word}: {res.error}")
    print("=" * 60)


def run_deck_command(args: argparse.Namespace, services: Services) -> int:
    decks = services.decks
    user = args.user

    if args.action == "create":
        deck = decks.create(
            {
                "name": args.name,
                "learning_rate": args.learning_rate,
                "from_lang": args.from_lang,
                "to_lang": args.to_lang,
            },
            user,
        )
        print(f"Created {format_deck(deck)}")
    elif args.action == "list":
        summaries = decks.find_all(user)
        if not summaries:
            print("No decks yet.")
        for summary in summaries:
            print(
                f"{format_deck(summary.deck)}: {summary.new_card_count} new, "
                f"{summary.old_card_count} due"
            )
    elif args.action == "show":
        deck = decks.find_by_reference(user, args.deck)
        print(format_deck(deck))
        learned = (
            deck.last_time_learned.isoformat() if deck.last_time_learned else "never"
        )
        print(f"Last learned: {learned} ({deck.num_cards_learned} card(s))")
    elif args.action == "stats":
        deck = decks.find_by_reference(user, args.deck)
        stats = decks.stats(deck.id)
        if not stats:
            print("Deck has no cards.")
        for entry in stats:
            print(f"stage {entry.stage}: {entry.count}")
    elif args.action == "swap":
        deck = decks.swap(decks.find_by_reference(user, args.deck), user)
        print(f"Created {format_deck(deck)}")
    elif args.action == "import":
        deck = decks.import_deck(user, args.deck_id)
        print(f"Imported {format_deck(deck)}")
    elif args.action == "rename":
        deck = decks.find_by_reference(user, args.deck)
        rate = (
            args.learning_rate
            if args.learning_rate is not None
            else deck.learning_rate
        )
        deck = decks.update(
            deck.id, {"name": args.name, "learning_rate": rate}, user
        )
        print(f"Updated {format_deck(deck)}")
    elif args.action == "remove":
        deck = decks.find_by_reference(user, args.deck)
        decks.remove(deck.id)
        print(f"Removed deck {deck.name}")
    return 0


def run_card_command(args: argparse.Namespace, services: Services) -> int:
    cards = services.cards
    deck = services.decks.find_by_reference(args.user, args.deck)

    if args.action == "add":
        result = cards.add_words(deck, args.words)
        print_batch_results(result)
        return 1 if result.failed > 0 else 0
    if args.action == "list":
        for card in cards.find_all(deck.id):
            print(format_card(card))
    elif args.action == "due":
        new_cards, old_cards = cards.cards_due_today(deck)
        print(f"{len(new_cards)} new, {len(old_cards)} due")
        for card in new_cards + old_cards:
            print(format_card(card))
    elif args.action == "review":
        card = cards.find_in_deck(deck, args.card_id)
        reviewed = cards.review_card(deck, card, Confidence(args.confidence))
        print(f"{reviewed.word}: stage {reviewed.stage}, next review {reviewed.expires}")
    elif args.action == "remove":
        cards.remove(deck, args.card_id)
        print(f"Removed card {args.card_id}")
    return 0


COMMANDS: dict[str, Callable[[argparse.Namespace, Services], int]] = {
    "deck": run_deck_command,
    "card": run_card_command,
}


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the CLI"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.resource:
        parser.print_help()
        sys.exit(0)

    debug = args.debug or settings.debug
    log_level = "DEBUG" if debug or args.verbose else settings.logging.level
    log_file = args.log_file or settings.logging.file
    setup_logging(log_level, str(log_file) if log_file else None)

    try:
        logger.debug(f"Running {args.resource} {args.action} as {args.user}")
        services = create_services(data_dir=args.data_dir)
        code = COMMANDS[args.resource](args, services)
        if code:
            sys.exit(code)

    except VocabWizardError as e:
        logger.error(f"Application error: {e.message}")
        if debug:
            logger.exception("Full traceback:")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
