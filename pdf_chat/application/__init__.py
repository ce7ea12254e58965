# application package
from .models import Answer
from .retriever import QueryEngine, build_prompt, format_context, QA_PROMPT
from .session import ChatSession, TurnAction, TurnOutcome, EXIT_COMMANDS
from .output import (
    display_banner,
    display_ready,
    display_answer,
    display_error,
    display_stats,
    display_goodbye
)

__all__ = [
    # Models
    "Answer",
    # Core
    "QueryEngine",
    "build_prompt",
    "format_context",
    "QA_PROMPT",
    "ChatSession",
    "TurnAction",
    "TurnOutcome",
    "EXIT_COMMANDS",
    # Output
    "display_banner",
    "display_ready",
    "display_answer",
    "display_error",
    "display_stats",
    "display_goodbye"
]
