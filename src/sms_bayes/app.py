# =============================================================================
# SMS-Bayes Application
# =============================================================================
# Command-line entry point and the Textual app for interactive use.
#
# Commands:
#   train     Load the dataset, split it, train, save the model, record the run
#   classify  Classify messages given on the command line
#   evaluate  Classify the held-out split, store predictions, print a report
#   words     Most common (stopword-filtered) words per class
#   tui       Interactive classifier
#
# The train/test split is recomputed from the config's seed every time, so
# "train" and "evaluate" always agree on which messages are held out.
# =============================================================================

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from textual.app import App
from textual.binding import Binding

from sms_bayes import __app_name__, __version__
from sms_bayes.config import Config, ConfigError, print_paths
from sms_bayes.core import Label, Message
from sms_bayes.dataset import DatasetError, load_messages, split_messages
from sms_bayes.report import evaluate, top_words
from sms_bayes.spam.classifier import ModelError, Prediction, SpamModel, token_contributions
from sms_bayes.storage import Database, Repository
from sms_bayes.ui.screens.classify import ClassifyScreen

logger = logging.getLogger(__name__)


class SmsBayesApp(App):
    """
    Interactive classifier application.

    Attributes:
        model: Trained model.
        empty_policy: Policy for messages with no known tokens.
    """

    TITLE = "SMS-Bayes"
    SUB_TITLE = "Naive Bayes spam classifier"

    BINDINGS = [
        Binding("escape", "quit", "Quit", priority=True),
    ]

    def __init__(self, model: SpamModel, empty_policy: str = "unknown") -> None:
        """
        Initialize the application.

        Args:
            model: Trained model to classify with.
            empty_policy: "unknown" or "prior".
        """
        super().__init__()
        self.model = model
        self.empty_policy = empty_policy

    async def on_mount(self) -> None:
        """Called when the application is mounted and ready."""
        await self.push_screen(ClassifyScreen(self.model, self.empty_policy))

    def action_quit(self) -> None:
        """Quit the application."""
        self.exit()


# =============================================================================
# Helpers
# =============================================================================

def setup_logging(level: str, *, debug: bool = False) -> None:
    """Configure the root logger."""
    logging.basicConfig(
        level=logging.DEBUG if debug else getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )


def _workers(config: Config) -> int | None:
    return config.model.workers or None


def _load_dataset(args: argparse.Namespace, config: Config) -> list[Message]:
    """Load the dataset named on the command line or in the config."""
    path = args.data or (Path(config.dataset.path) if config.dataset.path else None)
    if path is None:
        raise DatasetError("No dataset given (use --data or set dataset.path in the config)")

    return load_messages(
        path,
        label_column=config.dataset.label_column,
        text_columns=config.dataset.text_columns,
        encoding=config.dataset.encoding,
    )


def _split(messages: list[Message], config: Config) -> tuple[list[Message], list[Message]]:
    return split_messages(
        messages,
        test_size=config.split.test_size,
        random_state=config.split.random_state,
    )


async def _record_run(model: SpamModel) -> int:
    """Store a model as a new training run."""
    async with Database() as db:
        return await Repository(db).save_run(model)


async def _record_predictions(
    model: SpamModel,
    messages: list[Message],
    predictions: list[Prediction],
) -> int:
    """
    Store predictions under the run that matches the model.

    Reuses the latest run when it holds the same model, otherwise records
    the model as a new run first.
    """
    async with Database() as db:
        repo = Repository(db)
        run_id = await repo.latest_run_id()
        if run_id is None or await repo.load_run(run_id) != model:
            run_id = await repo.save_run(model)
        await repo.save_predictions(run_id, messages, predictions)
        return run_id


# =============================================================================
# Commands
# =============================================================================

def cmd_train(args: argparse.Namespace, config: Config) -> int:
    """Train and save a model."""
    train, _test = _split(_load_dataset(args, config), config)

    model = SpamModel.train(train, config.model.smoothing, workers=_workers(config))
    path = model.save(args.model)
    run_id = asyncio.run(_record_run(model))

    vocabulary = model.vocabulary
    print(f"Trained on {vocabulary.message_count} messages "
          f"({vocabulary.ham_messages} ham, {vocabulary.spam_messages} spam)")
    print(f"Vocabulary: {len(vocabulary)} tokens "
          f"(ham_total={vocabulary.ham_total}, spam_total={vocabulary.spam_total})")
    print(f"Priors: ham={model.priors.ham:.4f} spam={model.priors.spam:.4f}")
    print(f"Saved model to {path} (run {run_id})")
    return 0


def cmd_classify(args: argparse.Namespace, config: Config) -> int:
    """Classify messages from the command line."""
    model = SpamModel.load(args.model)

    for text in args.text:
        prediction = model.classify(text, empty_policy=config.model.empty_policy)
        print(f"{prediction.label.value}\t{text}")

        if args.explain:
            for token, share in token_contributions(text, model.table).items():
                print(f"    {token:<20} {share:.3f}")
    return 0


def cmd_evaluate(args: argparse.Namespace, config: Config) -> int:
    """Evaluate the saved model on the held-out split."""
    model = SpamModel.load(args.model)
    _train, test = _split(_load_dataset(args, config), config)

    predictions = model.classify_many(
        [message.text for message in test],
        empty_policy=config.model.empty_policy,
        workers=_workers(config),
    )
    run_id = asyncio.run(_record_predictions(model, test, predictions))

    print(evaluate(test, predictions).format())
    print()
    print(f"Stored {len(predictions)} predictions (run {run_id})")
    return 0


def cmd_words(args: argparse.Namespace, config: Config) -> int:
    """Print the most common words of one class in the training split."""
    train, _test = _split(_load_dataset(args, config), config)

    for word, count in top_words(train, Label(args.label), args.limit):
        print(f"{count:>7}  {word}")
    return 0


def cmd_tui(args: argparse.Namespace, config: Config) -> int:
    """Run the interactive classifier."""
    model = SpamModel.load(args.model)
    SmsBayesApp(model, config.model.empty_policy).run()
    return 0


COMMANDS = {
    "train": cmd_train,
    "classify": cmd_classify,
    "evaluate": cmd_evaluate,
    "words": cmd_words,
    "tui": cmd_tui,
}


# =============================================================================
# CLI Entry Point
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="SMS-Bayes: Naive Bayes spam classifier for short messages",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--paths",
        action="store_true",
        help="Print configuration paths and exit",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (default: XDG config location)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (verbose logging)",
    )

    # Options shared by subcommands
    data = argparse.ArgumentParser(add_help=False)
    data.add_argument("--data", type=Path, help="Dataset CSV (default: dataset.path from config)")
    model = argparse.ArgumentParser(add_help=False)
    model.add_argument("--model", type=Path, help="Model file (default: XDG data location)")

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    commands.add_parser("train", parents=[data, model], help="Train and save a model")

    classify = commands.add_parser("classify", parents=[model], help="Classify messages")
    classify.add_argument("text", nargs="+", help="Message text (one argument per message)")
    classify.add_argument("--explain", action="store_true", help="Show each token's spam share")

    commands.add_parser("evaluate", parents=[data, model], help="Evaluate on the held-out split")

    words = commands.add_parser("words", parents=[data], help="Most common words per class")
    words.add_argument("--label", choices=["ham", "spam"], default="spam")
    words.add_argument("--limit", type=int, default=20)

    commands.add_parser("tui", parents=[model], help="Interactive classifier")

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for SMS-Bayes.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.paths:
        print_paths()
        return 0

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = Config.load(args.config)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging.level, debug=args.debug)

    try:
        return COMMANDS[args.command](args, config)
    except (DatasetError, ModelError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
