"""
Matching Module

Strategy-based matching of free-text queries to catalog actions.
"""

from actionresolver.core.matching.base import ActionMatch, MatcherStrategy
from actionresolver.core.matching.exact_matcher import ExactMatcher
from actionresolver.core.matching.fuzzy_matcher import FuzzyMatcher
from actionresolver.core.matching.matcher import ActionMatcher

__all__ = [
    "ActionMatch",
    "ActionMatcher",
    "ExactMatcher",
    "FuzzyMatcher",
    "MatcherStrategy",
]
