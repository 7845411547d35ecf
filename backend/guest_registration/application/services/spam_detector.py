"""Heuristic spam detection over the free-text parts of a registration."""

import re

from guest_registration.application.schemas.registration import RegistrationCreate

_SPAM_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(.)\1{10,}"),                       # long run of one character
    re.compile(r"(test|fake|spam|dummy)\d*@", re.I),  # throwaway mailboxes
    re.compile(r"^\s*$"),                            # nothing but whitespace
    re.compile(
        r"\b(viagra|casino|lottery|winner|congratulations|urgent|click here)\b",
        re.I,
    ),
)


class SpamDetector:
    """Flags submissions whose name, email, and address look like spam."""

    def __init__(self, patterns: tuple[re.Pattern[str], ...] = _SPAM_PATTERNS):
        self._patterns = patterns

    def is_spam(self, data: RegistrationCreate) -> bool:
        text = f"{data.full_name} {data.email} {data.home_address}".lower()
        return self.matches(text)

    def matches(self, text: str) -> bool:
        return any(pattern.search(text) for pattern in self._patterns)
