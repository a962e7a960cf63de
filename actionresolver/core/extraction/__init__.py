"""
Extraction Module

Pulls positional arguments for a chosen action out of the query text.
"""

from actionresolver.core.extraction.base import ExtractionResult, ExtractorStrategy
from actionresolver.core.extraction.entity_extractor import EntityExtractor
from actionresolver.core.extraction.extractor import ArgumentExtractor
from actionresolver.core.extraction.pattern_extractor import PatternExtractor

__all__ = [
    "ArgumentExtractor",
    "EntityExtractor",
    "ExtractionResult",
    "ExtractorStrategy",
    "PatternExtractor",
]
