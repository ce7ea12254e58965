#!/usr/bin/env python3
# run_chat.py - Interactive PDF Chat
# ============================================================================
# This script drives the whole chat session:
# 1. Loads configuration from .env (and optional config.yaml)
# 2. Resolves the PDF path (flag, positional argument or prompt)
# 3. Embeds the PDF into Milvus, or attaches to the stored vectors
# 4. Answers questions until the user types 'exit' or 'quit'
#
# Usage:
#   pdf-chat --file ./documents/sample.pdf       # Embed, then chat
#   pdf-chat -f ./documents/sample.pdf -s        # Reuse stored vectors
#   pdf-chat ./documents/sample.pdf --reset      # Clear namespace, re-embed
#   pdf-chat --stats                             # List stored documents
# ============================================================================

import argparse
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from shared_config import Config, load_config
from pdf_chat.clients import build_embeddings, build_llm, connect_milvus
from pdf_chat.errors import ConfigurationError, PdfChatError
from pdf_chat.milvus import compute_fingerprint, index_document, open_vector_store
from pdf_chat.milvus.collection import VectorStore
from pdf_chat.application import (
    ChatSession,
    QueryEngine,
    display_banner,
    display_error,
    display_stats
)

console = Console()

EPILOG = """Example:
  pdf-chat --file ./documents/sample.pdf
  pdf-chat -f ./documents/sample.pdf -s"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdf-chat",
        description="PDF Chat - ask questions about a PDF stored in Milvus",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="PDF file path (used when --file is not given)"
    )
    parser.add_argument(
        "--file", "-f",
        type=str,
        default=None,
        help="Specify the PDF file path"
    )
    parser.add_argument(
        "--skip-embedding", "-s",
        action="store_true",
        help="Skip embedding process and use existing vectors"
    )
    parser.add_argument(
        "--reset", "-r",
        action="store_true",
        help="Clear the namespace before embedding"
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to config.yaml file"
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="List the documents stored in the namespace and exit"
    )
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parses the command line; unknown options are ignored."""
    args, _unknown = build_parser().parse_known_args(argv)
    return args


def ask_pdf_path() -> str:
    return Prompt.ask("Enter the path to your PDF file", console=console)


def resolve_pdf_path(
    args: argparse.Namespace,
    prompt: Callable[[], str] = ask_pdf_path
) -> Optional[str]:
    """
    Resolves the PDF path: --file, then positional argument, then prompt.

    Returns:
        The first non-empty candidate, or None if every source is empty
    """
    sources = (
        lambda: args.file,
        lambda: args.path,
        prompt,
    )

    for source in sources:
        value = source()
        if value and value.strip():
            return value.strip()

    return None


def should_embed(args: argparse.Namespace) -> bool:
    if args.skip_embedding:
        console.print("Skipping embedding process as requested...")
        return False

    if Confirm.ask("Do you want to process and embed this PDF into Milvus?", console=console):
        console.print("\nInitializing the PDF Chat system...")
        return True

    console.print("\nSkipping embedding process...")
    console.print("Using existing vectors from Milvus...")
    return False


def attach_vector_store(config: Config, pdf_path: str) -> VectorStore:
    """
    Connects to the stored vectors without re-embedding.

    The stored records are not required to come from this PDF; a warning is
    printed when none of them carries its fingerprint.
    """
    console.print("Connecting to Milvus to retrieve existing embeddings...")
    store = open_vector_store(config)

    if not store.has_fingerprint(compute_fingerprint(pdf_path)):
        console.print(
            f"[yellow]⚠ No stored vectors match {escape(Path(pdf_path).name)}; "
            "answers will come from whatever the namespace holds[/yellow]"
        )

    console.print("[green]✓ Connected to existing vector store in Milvus[/green]")
    return store


def initialize_engine(config: Config, pdf_path: str, args: argparse.Namespace) -> QueryEngine:
    """
    Builds the query engine, embedding the PDF first if requested.

    Both provider clients are built before anything is written to Milvus.

    Raises:
        PdfChatError: If extraction or any provider call fails
    """
    embed = should_embed(args)

    if args.reset and not embed:
        console.print("[yellow]⚠ --reset ignored because embedding is skipped[/yellow]")

    console.print("Connecting to Milvus...")
    connect_milvus(config)
    embeddings = build_embeddings(config)
    llm = build_llm(config)

    if embed:
        store, _ = index_document(config, pdf_path, embeddings, reset_namespace=args.reset)
    else:
        store = attach_vector_store(config, pdf_path)

    return QueryEngine(store, embeddings, llm, top_k=config.top_k)


def show_stats(config: Config) -> int:
    try:
        connect_milvus(config)
        store = open_vector_store(config)
        counts = store.count_chunks_by_document()
    except PdfChatError as e:
        display_error("Error reading the vector store", e)
        return 1

    display_stats(config.milvus.collection_name, store.namespace, counts)
    return 0


def run_chat(args: argparse.Namespace) -> int:
    """
    Runs the session from startup to the end of the question loop.

    Returns:
        Process exit status
    """
    display_banner()

    # ----- STARTUP -----
    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        return 1

    console.print("[green]✓ Configuration loaded[/green]")

    if args.stats:
        return show_stats(config)

    pdf_path = resolve_pdf_path(args)
    if not pdf_path:
        console.print("[red]✗ No PDF file path provided[/red]")
        return 1

    if not Path(pdf_path).is_file():
        console.print(f"[red]✗ File not found: {escape(pdf_path)}[/red]")
        return 1

    console.print(f"\nSelected PDF file: {escape(pdf_path)}")

    # ----- INITIALIZING -----
    try:
        engine = initialize_engine(config, pdf_path, args)
    except PdfChatError as e:
        display_error("Error in main process", e)
        return 1

    # ----- ACTIVE -----
    return ChatSession(engine).run()


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point with CLI argument parsing."""
    args = parse_args(argv)

    try:
        status = run_chat(args)
    except (EOFError, KeyboardInterrupt):
        console.print("\n[yellow]Interrupted[/yellow]")
        status = 1

    sys.exit(status)


if __name__ == "__main__":
    main()
