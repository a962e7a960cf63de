"""Core resolution pipeline: catalog, matching, extraction, execution."""

from actionresolver.core.actions import (
    ActionCategory,
    ActionDescriptor,
    DangerLevel,
    DirectCall,
    DomAction,
    Navigation,
    ScopeMatch,
    classify,
)
from actionresolver.core.catalog import ActionCatalog, CatalogError
from actionresolver.core.orchestrator import Candidate, CommandOrchestrator, CommandResponse
from actionresolver.core.scope import ScopeContext, ScopeProvider, StaticScopeProvider
from actionresolver.core.suggestions import Suggestion, SuggestionEngine

__all__ = [
    "ActionCatalog",
    "ActionCategory",
    "ActionDescriptor",
    "Candidate",
    "CatalogError",
    "CommandOrchestrator",
    "CommandResponse",
    "DangerLevel",
    "DirectCall",
    "DomAction",
    "Navigation",
    "ScopeContext",
    "ScopeMatch",
    "ScopeProvider",
    "StaticScopeProvider",
    "Suggestion",
    "SuggestionEngine",
    "classify",
]
