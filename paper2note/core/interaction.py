"""
User-facing collaborators: clipboard, notifications and blocking prompts
"""
from __future__ import annotations

import sys
from typing import Callable, List, Optional, TextIO

import pyperclip

from .errors import InvalidUrlError
from .models import Cancel, Custom, PromptChoice, UseDefault


class SystemClipboard:
    """Read text from the desktop clipboard"""

    def read_text(self) -> str:
        try:
            return pyperclip.paste() or ""
        except pyperclip.PyperclipException as exc:
            raise InvalidUrlError(f"Unable to read the clipboard: {exc}") from exc


class StaticClipboard:
    """Clipboard stand-in holding a fixed value (``--url`` on the CLI)"""

    def __init__(self, text: str):
        self.text = text

    def read_text(self) -> str:
        return self.text


class ConsoleNotifier:
    """Print transient notices, one per line"""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def notify(self, message: str) -> None:
        print(message, file=self.stream or sys.stdout)


class RecordingNotifier:
    """Collect notices in memory"""

    def __init__(self):
        self.messages: List[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


class ConsolePrompter:
    """Ask blocking questions on the terminal"""

    def __init__(self, ask: Callable[[str], str] = input, out: Optional[TextIO] = None):
        self.ask = ask
        self.out = out

    def confirm(self, question: str) -> Optional[bool]:
        """Yes/no question; ``None`` when the answer is empty (dialog dismissed)"""
        answer = self.ask(f"{question} [y/n] ").strip().lower()
        if not answer:
            return None
        return answer in ("y", "yes")

    def choose_prompt(self, default_prompt: str) -> PromptChoice:
        """
        Offer the default summary prompt for customization

        ``d`` (or empty) keeps the default, ``c`` cancels, ``e`` reads a custom
        prompt terminated by an empty line.
        """
        out = self.out or sys.stdout
        print("Current summary prompt:\n", file=out)
        print(default_prompt, file=out)
        answer = self.ask("\n[d]efault / [e]dit / [c]ancel: ").strip().lower()
        if answer.startswith("c"):
            return Cancel()
        if not answer.startswith("e"):
            return UseDefault()

        lines: List[str] = []
        while True:
            line = self.ask("> " if not lines else "")
            if not line.strip():
                break
            lines.append(line)
        return Custom("\n".join(lines))


class FixedPrompter:
    """Prompter answering from values decided up front (CLI flags, tests)"""

    def __init__(self, confirm_answer: Optional[bool] = None, prompt_choice: Optional[PromptChoice] = None):
        self.confirm_answer = confirm_answer
        self.prompt_choice = prompt_choice or UseDefault()
        self.questions: List[str] = []

    def confirm(self, question: str) -> Optional[bool]:
        self.questions.append(question)
        return self.confirm_answer

    def choose_prompt(self, default_prompt: str) -> PromptChoice:
        return self.prompt_choice
