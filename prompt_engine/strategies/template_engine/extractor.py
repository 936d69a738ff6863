"""Heuristic candidate extraction strategies.

Bootstraps a template from an existing prompt by treating ``[NAME]``,
``<NAME>`` and bare ALL_CAPS words as variables. Detection is lossy and
best-effort.
"""

import logging
import re

from prompt_engine.interfaces.template import BaseCandidateExtractor
from prompt_engine.strategies.template_engine.models import ExtractionResult
from prompt_engine.strategies.template_engine.scanner import placeholder, require_text

logger = logging.getLogger(__name__)

BRACKET_PATTERN = re.compile(r"\[([A-Z_]+)\]")
ANGLE_PATTERN = re.compile(r"<([A-Z_]+)>")
CAPS_PATTERN = re.compile(r"\b([A-Z][A-Z_]+)\b")

# Alternation order is the precedence: bracket > angle > bare caps.
_PRIORITY_PATTERN = re.compile(
    r"\[(?P<bracket>[A-Z_]+)\]|<(?P<angle>[A-Z_]+)>|\b(?P<caps>[A-Z][A-Z_]+)\b"
)

DEFAULT_MIN_CANDIDATE_LENGTH = 3


def normalize_name(candidate: str) -> str:
    """Canonical variable name for a detected token."""
    return candidate.lower()


class PriorityCandidateExtractor(BaseCandidateExtractor):
    """Single-pass extractor with an explicit precedence per span.

    Every span of the prompt is claimed by at most one rule, so a bracketed
    token is never rewritten a second time by the bare-caps rule.
    """

    def __init__(self, min_length: int = DEFAULT_MIN_CANDIDATE_LENGTH) -> None:
        """Initialize the extractor.

        Args:
            min_length: Minimum length of a bare caps word; shorter words
                are treated as acronyms. Does not apply to bracket or angle
                forms.
        """
        self._min_length = min_length

    def extract(self, prompt_text: str) -> ExtractionResult:
        require_text(prompt_text, "prompt_text")

        candidates: dict[str, str] = {}
        for match in _PRIORITY_PATTERN.finditer(prompt_text):
            token = match.group("bracket") or match.group("angle")
            if token is None:
                token = match.group("caps")
                if len(token) < self._min_length:
                    continue
            candidates.setdefault(token, normalize_name(token))

        def replace(match: re.Match[str]) -> str:
            token = match.group("bracket") or match.group("angle") or match.group("caps")
            name = candidates.get(token)
            return match.group(0) if name is None else placeholder(name)

        templated = _PRIORITY_PATTERN.sub(replace, prompt_text)
        detected = list(dict.fromkeys(candidates.values()))

        logger.info(f"Priority extraction detected {len(detected)} variables")
        return ExtractionResult(templated_content=templated, detected_variables=detected)

    @property
    def strategy_name(self) -> str:
        return "priority"


class UnionCandidateExtractor(BaseCandidateExtractor):
    """Three independent scans, unioned, then one global replace per name.

    Kept for compatibility with templates bootstrapped by earlier releases.
    A token matched by more than one family can be processed more than once.
    """

    def __init__(self, min_length: int = DEFAULT_MIN_CANDIDATE_LENGTH) -> None:
        self._min_length = min_length

    def extract(self, prompt_text: str) -> ExtractionResult:
        require_text(prompt_text, "prompt_text")

        tokens: dict[str, None] = {}
        for pattern in (BRACKET_PATTERN, ANGLE_PATTERN):
            for match in pattern.finditer(prompt_text):
                tokens.setdefault(match.group(1))
        for match in CAPS_PATTERN.finditer(prompt_text):
            if len(match.group(1)) >= self._min_length:
                tokens.setdefault(match.group(1))

        templated = prompt_text
        detected: list[str] = []
        for token in tokens:
            name = normalize_name(token)
            if name not in detected:
                detected.append(name)
            escaped = re.escape(token)
            surface = re.compile(rf"\[{escaped}\]|<{escaped}>|\b{escaped}\b")
            templated = surface.sub(lambda _match, name=name: placeholder(name), templated)

        logger.info(f"Union extraction detected {len(detected)} variables")
        return ExtractionResult(templated_content=templated, detected_variables=detected)

    @property
    def strategy_name(self) -> str:
        return "union"


EXTRACTORS: dict[str, type[BaseCandidateExtractor]] = {
    "priority": PriorityCandidateExtractor,
    "union": UnionCandidateExtractor,
}
