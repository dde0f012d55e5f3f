"""
AssistantCommand — Ask the SOP assistant

Commands:
- ask QUESTION [--context TEXT]
- next SITUATION [--idea SLUG]
"""

from typing import Optional

from ..commands.base import BaseCommand
from ..presentation.symbols import safe_print, sanitize_control_chars


class AssistantCommand(BaseCommand):
    """Command wrapping the model-backed SOP assistant."""

    def _thinking(self):
        if not self.json_output:
            safe_print(f"{self.symbols.asking} Asking the SOP assistant...")

    def ask(self, question: str, context: Optional[str] = None) -> int:
        self._thinking()
        data = self.launchpad.ask_sop_assistant(question, context)
        return self.emit(data, lambda r: self._answer(r["response"]))

    def next_sop(self, situation: str, idea_slug: Optional[str] = None) -> int:
        self._thinking()
        data = self.launchpad.suggest_next_sop(situation, idea_slug)
        return self.emit(data, lambda r: self._answer(r["recommendation"]))

    def _answer(self, text: str) -> str:
        # Model output goes to a terminal
        return f"{self.symbols.answer} {sanitize_control_chars(text)}"


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAMES = ['ask', 'next']


def register_parser(subparsers):
    """Register ask and next command parsers."""
    p1 = subparsers.add_parser('ask', help='Ask the SOP assistant a question')
    p1.add_argument('question', help="e.g. 'What happens after the audit?'")
    p1.add_argument('--context', help='Current SOP, idea slug, or background')

    p2 = subparsers.add_parser('next', help='Which SOP should I run next?')
    p2.add_argument('situation', help="e.g. 'idea passed audit'")
    p2.add_argument('--idea', dest='idea_slug', help='Slug of the idea you are working on')

    return p1, p2


def handle(cli, args):
    """Dispatch ask or next."""
    if args.command == 'ask':
        return cli._assistant_cmd.ask(args.question, args.context)
    return cli._assistant_cmd.next_sop(args.situation, args.idea_slug)
