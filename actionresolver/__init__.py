"""
ActionResolver

Resolve free-text commands into registered application actions, extract
their arguments, execute them, and suggest corrections when nothing
matches.
"""

from actionresolver.config.settings import DEFAULT_SETTINGS, ResolverSettings, load_settings
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
from actionresolver.core.execution import ActionExecutor, ExecutionOutcome
from actionresolver.core.extraction import ArgumentExtractor, ExtractionResult
from actionresolver.core.matching import ActionMatch, ActionMatcher, MatcherStrategy
from actionresolver.core.orchestrator import Candidate, CommandOrchestrator, CommandResponse
from actionresolver.core.rpc_server import ActionRPCServer
from actionresolver.core.scope import ScopeContext, ScopeProvider, StaticScopeProvider
from actionresolver.core.suggestions import Suggestion, SuggestionEngine

__version__ = "0.1.0"

__all__ = [
    "ActionCatalog",
    "ActionCategory",
    "ActionDescriptor",
    "ActionExecutor",
    "ActionMatch",
    "ActionMatcher",
    "ActionRPCServer",
    "ArgumentExtractor",
    "Candidate",
    "CatalogError",
    "CommandOrchestrator",
    "CommandResponse",
    "DEFAULT_SETTINGS",
    "DangerLevel",
    "DirectCall",
    "DomAction",
    "ExecutionOutcome",
    "ExtractionResult",
    "MatcherStrategy",
    "Navigation",
    "ResolverSettings",
    "ScopeContext",
    "ScopeMatch",
    "ScopeProvider",
    "StaticScopeProvider",
    "Suggestion",
    "SuggestionEngine",
    "classify",
    "load_settings",
]
