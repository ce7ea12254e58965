# session.py - Interactive Question Loop
# =============================================================================

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from rich.console import Console
from rich.prompt import Prompt

from pdf_chat.errors import ProviderError
from .models import Answer
from .output import display_answer, display_error, display_goodbye, display_ready
from .retriever import QueryEngine

console = Console()

EXIT_COMMANDS = ("exit", "quit")


class TurnAction(Enum):
    EXIT = "exit"
    SKIP = "skip"
    ANSWERED = "answered"
    FAILED = "failed"


@dataclass
class TurnOutcome:
    """Result of one prompt-read-answer cycle."""
    action: TurnAction
    answer: Optional[Answer] = None
    error: Optional[ProviderError] = None


def ask_question() -> str:
    return Prompt.ask("Your question", console=console)


class ChatSession:
    """
    Sequential question/answer loop over a QueryEngine.

    A failed cycle is returned as a FAILED outcome instead of unwinding the
    loop, so the next question is always prompted for.
    """

    def __init__(self, engine: QueryEngine, read_input: Callable[[], str] = ask_question):
        self.engine = engine
        self.read_input = read_input

    def handle(self, user_input: str) -> TurnOutcome:
        question = user_input.strip()

        if question.lower() in EXIT_COMMANDS:
            return TurnOutcome(TurnAction.EXIT)
        if not question:
            return TurnOutcome(TurnAction.SKIP)

        try:
            answer = self.engine.ask(question)
        except ProviderError as e:
            return TurnOutcome(TurnAction.FAILED, error=e)

        return TurnOutcome(TurnAction.ANSWERED, answer=answer)

    def next_outcome(self) -> TurnOutcome:
        try:
            user_input = self.read_input()
        except (EOFError, KeyboardInterrupt):
            console.print()
            return TurnOutcome(TurnAction.EXIT)
        return self.handle(user_input)

    def run(self) -> int:
        """
        Runs the loop until the user leaves.

        Returns:
            Process exit status (0)
        """
        display_ready()

        while True:
            outcome = self.next_outcome()

            if outcome.action is TurnAction.EXIT:
                display_goodbye()
                return 0
            if outcome.action is TurnAction.ANSWERED:
                display_answer(outcome.answer)
            elif outcome.action is TurnAction.FAILED:
                display_error("Error processing your query", outcome.error)
