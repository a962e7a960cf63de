"""
Suggestion Engine

"Did you mean?" suggestions for queries that matched no action:

- typo: edit distance 1..typo_max_distance to the action name or an example
- similar: share of query words found in the action's name, description
  and example words
- category: up to ``category_limit`` actions of the first category whose
  keyword appears in the query, at a fixed confidence
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from actionresolver.config.settings import DEFAULT_SETTINGS, ResolverSettings
from actionresolver.core.actions import ActionDescriptor
from actionresolver.utils.text_utils import levenshtein, normalize, to_percent, words

logger = logging.getLogger("ActionResolver.Suggestions")

TYPO = "typo"
SIMILAR = "similar"
EXAMPLE = "example"
CATEGORY = "category"

# Checked in order; the first category with a keyword in the query wins.
CATEGORY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("navigation", ("go", "open", "navigate", "show", "view", "page")),
    ("theme", ("theme", "color", "dark", "light", "appearance")),
    ("data", ("load", "fetch", "get", "data", "retrieve")),
    ("form", ("submit", "save", "form", "input", "enter")),
    ("state", ("set", "change", "update", "modify", "status")),
)

FORMAT_SECTION_LIMIT = 3


@dataclass
class Suggestion:
    """A corrective suggestion derived from one action."""
    text: str
    confidence: int
    type: str
    action: Optional[ActionDescriptor] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "text": self.text,
            "confidence": self.confidence,
            "type": self.type,
            "action": self.action.id if self.action else None,
        }


def match_category(query: str) -> Optional[str]:
    """First category whose keywords include a word of the query."""
    query_words = set(words(query))
    for category, keywords in CATEGORY_KEYWORDS:
        if query_words.intersection(keywords):
            return category
    return None


class SuggestionEngine:
    """Generates and formats "did you mean?" suggestions."""

    def __init__(self, settings: Optional[ResolverSettings] = None):
        self.settings = settings or DEFAULT_SETTINGS

    def get_suggestions(
        self,
        query: str,
        actions: List[ActionDescriptor],
        max_suggestions: Optional[int] = None,
    ) -> List[Suggestion]:
        """
        Suggest corrections for ``query`` among ``actions``.

        Args:
            query: The query that failed to resolve
            actions: Actions visible in the current scope
            max_suggestions: Maximum suggestions (defaults to settings)

        Returns:
            Suggestions sorted by confidence, unique by text, never equal
            to the query itself
        """
        if max_suggestions is None:
            max_suggestions = self.settings.max_suggestions
        lowered = normalize(query)
        if not lowered:
            return []

        suggestions = self._typos(lowered, actions)
        suggestions.extend(self._similar(lowered, actions))
        suggestions.extend(self._by_category(lowered, actions))

        suggestions.sort(key=lambda s: s.confidence, reverse=True)
        unique: List[Suggestion] = []
        seen = set()
        for suggestion in suggestions:
            if suggestion.text in seen or normalize(suggestion.text) == lowered:
                continue
            seen.add(suggestion.text)
            unique.append(suggestion)

        logger.debug(f"Suggestions for '{query}': {[s.text for s in unique[:max_suggestions]]}")
        return unique[:max_suggestions]

    def _typos(self, lowered: str, actions: List[ActionDescriptor]) -> List[Suggestion]:
        found = []
        for action in actions:
            for phrase in [action.name, *action.examples]:
                distance = levenshtein(lowered, phrase.lower())
                if 0 < distance <= self.settings.typo_max_distance:
                    longest = max(len(lowered), len(phrase))
                    found.append(Suggestion(
                        text=phrase,
                        confidence=to_percent(1 - distance / longest),
                        type=TYPO,
                        action=action,
                    ))
        return found

    def _similar(self, lowered: str, actions: List[ActionDescriptor]) -> List[Suggestion]:
        query_words = lowered.split(" ")
        found = []
        for action in actions:
            vocabulary = set(words(action.name)) | set(words(action.description))
            for example in action.examples:
                vocabulary.update(words(example))
            overlap = sum(1 for w in query_words if w in vocabulary)
            if overlap:
                found.append(Suggestion(
                    text=action.examples[0] if action.examples else action.name,
                    confidence=to_percent(overlap / len(query_words)),
                    type=SIMILAR,
                    action=action,
                ))
        return found

    def _by_category(self, lowered: str, actions: List[ActionDescriptor]) -> List[Suggestion]:
        category = match_category(lowered)
        if category is None:
            return []
        members = [a for a in actions if a.category == category]
        return [
            Suggestion(
                text=action.examples[0] if action.examples else action.name,
                confidence=self.settings.category_confidence,
                type=CATEGORY,
                action=action,
            )
            for action in members[:self.settings.category_limit]
        ]

    @staticmethod
    def format_suggestions(suggestions: List[Suggestion]) -> str:
        """
        Render suggestions as a short user-facing message.

        Typos go under "Did you mean?", everything else
        under "Similar commands:", at most three lines each.
        """
        if not suggestions:
            return "No suggestions available."

        typos = [s for s in suggestions if s.type == TYPO]
        similar = [s for s in suggestions if s.type in (SIMILAR, EXAMPLE, CATEGORY)]

        sections = []
        if typos:
            lines = ["❓ Did you mean?"]
            lines += [f'  • "{s.text}"' for s in typos[:FORMAT_SECTION_LIMIT]]
            sections.append("\n".join(lines))
        if similar:
            lines = ["💡 Similar commands:"]
            lines += [f'  • "{s.text}"' for s in similar[:FORMAT_SECTION_LIMIT]]
            sections.append("\n".join(lines))
        return "\n\n".join(sections)
