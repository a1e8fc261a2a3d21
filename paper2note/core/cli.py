"""
CLI interface for paper2note
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_SETTINGS_FILE, Settings, load_settings, update_settings
from .errors import ConfigError, Paper2NoteError
from .interaction import (
    ConsoleNotifier,
    ConsolePrompter,
    FixedPrompter,
    StaticClipboard,
    SystemClipboard,
)
from .log import setup_logging
from .models import Custom, UseDefault
from .paper_fetcher import PaperFetcher
from .services import (
    ArxivMetadataService,
    PDFDownloadService,
    PDFTextService,
    SummaryService,
)
from .summarizer import Summarizer
from .vault import Vault


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser"""
    parser = argparse.ArgumentParser(
        prog="paper2note",
        description="Fetch Arxiv papers into markdown notes: metadata, PDFs and AI summaries",
    )
    parser.add_argument(
        "--vault",
        default=".",
        help="Vault (notes folder) to work in",
    )
    parser.add_argument(
        "--config",
        default=str(DEFAULT_SETTINGS_FILE),
        help="YAML settings file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--log-file",
        help="Also write logs to this file",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    metadata = commands.add_parser("metadata", help="Insert Arxiv metadata into a note")
    _add_url_option(metadata)
    metadata.add_argument(
        "--note",
        help="Vault path of the active note (a dated note is created when omitted)",
    )
    metadata.add_argument(
        "--related",
        choices=["yes", "no", "ask", "skip"],
        default="ask",
        help="Create notes for influential related papers (yes), list titles (no)",
    )

    download = commands.add_parser("download", help="Download the paper PDF into the vault")
    _add_url_option(download)

    summarize = commands.add_parser("summarize", help="Append an AI summary of the paper to a note")
    _add_url_option(summarize)
    summarize.add_argument("--note", required=True, help="Vault path of the active note")
    prompt = summarize.add_mutually_exclusive_group()
    prompt.add_argument("--prompt", help="Custom summary instructions")
    prompt.add_argument("--prompt-file", help="Read custom summary instructions from a file")
    prompt.add_argument(
        "--ask-prompt",
        action="store_true",
        help="Review and edit the summary prompt interactively",
    )

    extract = commands.add_parser("extract", help="Extract the text of a vault PDF into a note")
    extract.add_argument("pdf", help="Vault path of the PDF")

    settings = commands.add_parser("settings", help="Show or change settings")
    settings_commands = settings.add_subparsers(dest="settings_command", required=True)
    settings_commands.add_parser("show", help="Print the effective settings")
    setter = settings_commands.add_parser("set", help="Persist one setting")
    setter.add_argument("key", choices=sorted(Settings.model_fields))
    setter.add_argument("value")

    return parser


def _add_url_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--url",
        help="Arxiv URL to use instead of the clipboard content",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose, log_file=Path(args.log_file) if args.log_file else None)

    try:
        if args.command == "settings":
            return _run_settings(args)
        settings = load_settings(args.config)
    except Paper2NoteError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    vault = Vault(args.vault)
    notifier = ConsoleNotifier()
    clipboard = StaticClipboard(args.url) if getattr(args, "url", None) else SystemClipboard()
    fetcher = PaperFetcher(timeout=settings.request_timeout)

    if args.command == "metadata":
        service = ArxivMetadataService(vault, fetcher, clipboard, notifier, _related_prompter(args.related))
        result = service.fetch_metadata_from_clipboard(active=args.note)
    elif args.command == "download":
        result = PDFDownloadService(vault, fetcher, settings, clipboard, notifier).download_from_clipboard()
    elif args.command == "summarize":
        try:
            prompter = _summary_prompter(args)
        except OSError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        service = SummaryService(vault, fetcher, Summarizer(settings), clipboard, notifier, prompter)
        result = service.summarize_from_clipboard(active=args.note)
    else:
        result = PDFTextService(vault, notifier).extract_to_note(args.pdf)

    return 0 if result is not None else 1


def _run_settings(args: argparse.Namespace) -> int:
    if args.settings_command == "show":
        settings = load_settings(args.config)
        for key, value in settings.model_dump().items():
            if key == "api_key" and value:
                value = f"{value[:4]}..."
            print(f"{key}: {value}")
        return 0

    try:
        update_settings(args.config, **{args.key: args.value})
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Saved {args.key} to {args.config}")
    return 0


def _related_prompter(mode: str):
    if mode == "ask":
        return ConsolePrompter()
    answers = {"yes": True, "no": False, "skip": None}
    return FixedPrompter(confirm_answer=answers[mode])


def _summary_prompter(args: argparse.Namespace):
    if args.ask_prompt:
        return ConsolePrompter()
    if args.prompt_file:
        return FixedPrompter(prompt_choice=Custom(Path(args.prompt_file).read_text(encoding="utf-8")))
    if args.prompt:
        return FixedPrompter(prompt_choice=Custom(args.prompt))
    return FixedPrompter(prompt_choice=UseDefault())


if __name__ == "__main__":
    sys.exit(main())
