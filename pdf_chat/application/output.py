# output.py - Session Transcript
# =============================================================================

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .models import Answer

console = Console()


def display_banner() -> None:
    """Displays the system's initial banner."""
    console.print(Panel.fit(
        "[bold]PDF Chat[/bold]\n"
        "Ask questions about a PDF using Milvus + Gemini",
        title="📄 PDF Chat",
        border_style="cyan"
    ))


def display_ready() -> None:
    """Displays the banner that opens the question loop."""
    console.print()
    console.print("===================================")
    console.print("[bold green]PDF Chat System is ready![/bold green]")
    console.print("Type your questions about the PDF below.")
    console.print("Type 'exit' or 'quit' to end the session.")
    console.print("===================================")
    console.print()


def display_answer(answer: Answer) -> None:
    """Prints the delimited answer block and its source pages."""
    console.print()
    console.print("----- ANSWER -----")
    console.print(escape(answer.text))
    console.print("------------------")

    if answer.sources:
        pages = ", ".join(str(p) for p in answer.pages)
        console.print(f"[dim]Sources: {len(answer.sources)} chunks from page(s) {pages}[/dim]")
    else:
        console.print("[dim]Sources: no stored chunks matched[/dim]")
    console.print()


def display_error(message: str, error: Exception) -> None:
    console.print(f"[red]✗ {message}: {escape(str(error))}[/red]")


def display_stats(collection_name: str, namespace: str, counts: dict[str, int]) -> None:
    """Lists the documents stored in the namespace."""
    if not counts:
        console.print(f"[yellow]⚠ Namespace '{namespace}' has no stored chunks[/yellow]")
        return

    table = Table(title=f"📚 Indexed Documents ({collection_name} / {namespace})")
    table.add_column("Filename", style="cyan")
    table.add_column("Chunks", justify="right", style="green")

    for filename, chunks in sorted(counts.items()):
        table.add_row(escape(filename), str(chunks))

    console.print(table)
    console.print(
        f"\n[bold]Total:[/bold] {len(counts)} documents, {sum(counts.values())} chunks"
    )


def display_goodbye() -> None:
    console.print("Thank you for using PDF Chat. Goodbye!")
