"""
Summarization via the Gemini generateContent endpoint
"""
from __future__ import annotations

import logging
import time
from typing import Optional

import requests

from .config import Settings
from .errors import Cancelled, ConfigError, RemoteFetchError
from .models import Cancel, Custom, PromptChoice, UseDefault

logger = logging.getLogger(__name__)


GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models"

TEXT_SEPARATOR = "\n\nText to summarize: "

DEFAULT_PROMPT = """You are a deep learning expert. You have received the text of a long document, page by page. You need to create a comprehensive final summary of it. Please follow these steps:

Step 1: Extract key keywords and technical terms from the document. Bold each keyword and add a brief explanation.
Step 2: List the main points of the document. Include relevant keywords for each point.
Step 3: Elaborate on each point in 5-10 sentences. Use the extracted keywords in your explanations.
Step 4: Explain the relationships or connections between the points. Use keywords here as well.
Step 5: Briefly discuss the importance or potential impact of this information. Mention why the key keywords are important.

The final summary should faithfully reflect the essence of the entire document while being easy to read and informative.
Avoid vague or general statements and provide specific, substantial information.
Be sure to include and emphasize specific terms and content cited from other papers!
Bold these keywords and add a brief explanation if possible.
At the end of the summary, list all the main keywords once again."""

LANGUAGE_NAMES = {
    "korean": "Korean",
    "japanese": "Japanese",
    "chinese": "Chinese",
}


def resolve_prompt(choice: PromptChoice) -> Optional[str]:
    """
    Turn the prompt dialog's answer into the prompt to send

    Returns:
        ``None`` for the built-in prompt, otherwise the custom text

    Raises:
        Cancelled: if the user dismissed the dialog
    """
    if isinstance(choice, Cancel):
        raise Cancelled("Summary cancelled")
    if isinstance(choice, Custom) and choice.text.strip():
        return choice.text
    if isinstance(choice, (Custom, UseDefault)):
        return None
    raise TypeError(f"Unexpected prompt choice: {choice!r}")


class Summarizer:
    """Send extracted paper text to Gemini and return the generated summary"""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()

    def build_prompt(self, text: str, prompt: Optional[str] = None) -> str:
        instructions = prompt if prompt and prompt.strip() else DEFAULT_PROMPT
        if self.settings.translate_enabled:
            language = LANGUAGE_NAMES[self.settings.target_language]
            instructions = f"{instructions}\n\nWrite the entire summary in {language}."
        return f"{instructions}{TEXT_SEPARATOR}{text}"

    def summarize(self, text: str, prompt: Optional[str] = None) -> str:
        """
        Summarize ``text`` with ``prompt`` (or the default prompt)

        Raises:
            ConfigError: If no API key is configured
            RemoteFetchError: On a non-200 answer or an unexpected response body
        """
        api_key = self.settings.api_key.strip()
        if not api_key:
            raise ConfigError("Gemini API key is not configured")

        payload = {"contents": [{"parts": [{"text": self.build_prompt(text, prompt)}]}]}
        url = f"{GEMINI_API_URL}/{self.settings.model}:generateContent"

        logger.info("Calling Gemini  model=%s  (%s chars)", self.settings.model, f"{len(text):,}")
        t0 = time.monotonic()
        try:
            response = self.session.post(
                url,
                params={"key": api_key},
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.settings.summary_timeout,
            )
        except requests.RequestException as exc:
            raise RemoteFetchError(f"Gemini API request failed: {exc}") from exc

        if response.status_code != 200:
            raise RemoteFetchError(f"Gemini API request failed: {response.status_code}")

        try:
            result = response.json()
            summary = result["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise RemoteFetchError("Unexpected Gemini API response") from exc

        logger.info("Summary received (%.1fs, %s chars)", time.monotonic() - t0, f"{len(summary):,}")
        return summary
