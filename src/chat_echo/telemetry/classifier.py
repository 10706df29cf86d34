"""Heuristic classification of AI assistant content.

Decides whether arbitrary text (typically a clipboard snapshot) looks like
output copied from an AI assistant, and explains why.

Two independent rule lists are evaluated:
- DETECTION_SIGNALS: seven named predicates OR-ed into ``is_likely``
- REASON_RULES: five labelled checks that produce the explanation

The lists intentionally do not mirror each other. Some signals (explanatory
openings, code introductions, bold lines) have no reason label, so text that
trips only those is explained with the generic sentinel reason. Keep the two
lists independent when adding rules.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from chat_echo.constants import (
    LONG_CONTENT_MIN_LENGTH,
    REASON_ASSISTANT_REPLY,
    REASON_CODE_BLOCK,
    REASON_GENERIC,
    REASON_LONG_CONTENT,
    REASON_MARKDOWN,
    REASON_MULTI_LINE,
    STRUCTURE_MIN_LENGTH,
)
from chat_echo.models.entry import ClassificationResult

logger = logging.getLogger(__name__)

# Patterns accept English and Chinese phrasing; "^" without MULTILINE anchors at text start
ASSISTANT_OPENING = re.compile(r"^(我|I)\s*(可以|can|will|would|should)\s*(帮助|help|assist)", re.I)
EXPLANATORY_OPENING = re.compile(
    r"^(根据|based on|according to|这是|here is|here's|让我|let me)", re.I
)
FENCED_CODE_BLOCK = re.compile(r"```.*```", re.S)
CODE_INTRODUCTION = re.compile(r"^(这段代码|this code|the code|以下是|here's the|below is)", re.I)
MARKDOWN_HEADING = re.compile(r"^##\s+", re.M)
BOLD_LINE = re.compile(r"^\*\*.*\*\*$", re.M)
MULTI_LINE = re.compile(r"\n.*\n")


def _matches(pattern: re.Pattern[str]) -> Callable[[str], bool]:
    return lambda text: pattern.search(text) is not None


def _is_long_multiline(text: str) -> bool:
    return len(text) > STRUCTURE_MIN_LENGTH and MULTI_LINE.search(text) is not None


def _is_long(text: str) -> bool:
    return len(text) > LONG_CONTENT_MIN_LENGTH


@dataclass(frozen=True)
class TextRule:
    """A named predicate over text.

    Attributes:
        name: Identifier of the rule (detection signal name or reason label).
        predicate: Returns True when the rule fires.
    """

    name: str
    predicate: Callable[[str], bool]

    def matches(self, text: str) -> bool:
        """Evaluate the rule against text."""
        return self.predicate(text)


DETECTION_SIGNALS: tuple[TextRule, ...] = (
    TextRule("assistant_opening", _matches(ASSISTANT_OPENING)),
    TextRule("explanatory_opening", _matches(EXPLANATORY_OPENING)),
    TextRule("fenced_code_block", _matches(FENCED_CODE_BLOCK)),
    TextRule("code_introduction", _matches(CODE_INTRODUCTION)),
    TextRule("markdown_heading", _matches(MARKDOWN_HEADING)),
    TextRule("bold_line", _matches(BOLD_LINE)),
    TextRule("long_multiline", _is_long_multiline),
)

REASON_RULES: tuple[TextRule, ...] = (
    TextRule(REASON_ASSISTANT_REPLY, _matches(ASSISTANT_OPENING)),
    TextRule(REASON_CODE_BLOCK, _matches(FENCED_CODE_BLOCK)),
    TextRule(REASON_MARKDOWN, _matches(MARKDOWN_HEADING)),
    TextRule(REASON_LONG_CONTENT, _is_long),
    TextRule(REASON_MULTI_LINE, _matches(MULTI_LINE)),
)


class ContentClassifier:
    """Classifies text as likely AI assistant output.

    Pure and stateless: the same input always produces the same result.

    Example:
        >>> classifier = ContentClassifier()
        >>> result = classifier.classify("I can help you with that")
        >>> result.is_likely
        True
        >>> result.reasons
        ['assistant reply pattern']
    """

    def __init__(
        self,
        signals: tuple[TextRule, ...] = DETECTION_SIGNALS,
        reason_rules: tuple[TextRule, ...] = REASON_RULES,
    ):
        self.signals = signals
        self.reason_rules = reason_rules

    def matching_signals(self, text: str) -> list[str]:
        """Names of the detection signals that fire for text."""
        return [signal.name for signal in self.signals if signal.matches(text)]

    def is_likely(self, text: str | None) -> bool:
        """Check whether any detection signal fires."""
        if not text:
            return False
        return any(signal.matches(text) for signal in self.signals)

    def reasons(self, text: str) -> list[str]:
        """Explain a positive classification.

        Returns:
            Labels of the reason rules that fire, or the generic sentinel
            reason when none does.
        """
        labels = [rule.name for rule in self.reason_rules if rule.matches(text)]
        return labels or [REASON_GENERIC]

    def classify(self, text: str | None) -> ClassificationResult:
        """Classify text.

        Args:
            text: Text to classify (None and empty text are never likely)

        Returns:
            ClassificationResult; reasons are empty when not likely
        """
        if not text or not self.is_likely(text):
            return ClassificationResult(is_likely=False, reasons=[])

        result = ClassificationResult(is_likely=True, reasons=self.reasons(text))
        logger.debug(
            f"Classified {len(text)} chars as AI content",
            extra={"signals": self.matching_signals(text), "reasons": result.reasons},
        )
        return result


# Module-level singleton for convenience
_classifier: ContentClassifier | None = None


def get_content_classifier() -> ContentClassifier:
    """Get or create the shared classifier."""
    global _classifier
    if _classifier is None:
        _classifier = ContentClassifier()
    return _classifier


def classify_content(text: str | None) -> ClassificationResult:
    """Convenience function to classify text with the shared classifier."""
    return get_content_classifier().classify(text)
