"""
Command Orchestrator

Facade over the resolution pipeline:

    query + scope -> catalog filter -> matcher -> candidates
    candidates -> (approval) -> extractor -> executor -> first success

Each call reads the catalog and the current scope and keeps no state of its
own between calls, so repeating a query against an unchanged catalog gives
the same result.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from actionresolver.config.settings import DEFAULT_SETTINGS, ResolverSettings
from actionresolver.core.actions import ActionCategory, ActionDescriptor, DangerLevel
from actionresolver.core.catalog import ActionCatalog
from actionresolver.core.execution.base_executor import ExecutionOutcome, maybe_await
from actionresolver.core.execution.executor import ActionExecutor
from actionresolver.core.execution.navigation_executor import NavigateHandler
from actionresolver.core.extraction.base import ExtractionResult
from actionresolver.core.extraction.extractor import ArgumentExtractor
from actionresolver.core.matching.base import MatcherStrategy
from actionresolver.core.matching.matcher import ActionMatcher
from actionresolver.core.scope import ScopeContext, ScopeProvider, StaticScopeProvider
from actionresolver.core.suggestions import EXAMPLE, Suggestion, SuggestionEngine

logger = logging.getLogger("ActionResolver.Orchestrator")

NO_MATCH_MESSAGE = "❓ No matching command found."
HELP_HINT = 'Try typing "help" to see available commands.'
REPHRASE_HINT = "Try rephrasing the command."
EXAMPLE_FALLBACK_LIMIT = 5

HELP_ACTION_ID = "help"
HELP_EXAMPLES = ["help", "show commands", "what can I do"]


@dataclass
class Candidate:
    """A matched action ready to be attempted."""
    query: str
    action: ActionDescriptor
    confidence: int
    arguments: List[Any] = field(default_factory=list)
    reasoning: Optional[str] = None
    requires_approval: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action.id,
            "name": self.action.name,
            "confidence": self.confidence,
            "arguments": list(self.arguments),
            "reasoning": self.reasoning,
            "requires_approval": self.requires_approval,
        }


@dataclass
class CommandResponse:
    """Terminal result of one resolution-and-execution call."""
    success: bool
    message: str
    executed_action: Optional[str] = None
    confidence: Optional[int] = None
    suggestions: List[Suggestion] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    outcome: Optional[ExecutionOutcome] = None
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "executed_action": self.executed_action,
            "confidence": self.confidence,
            "suggestions": [s.to_dict() for s in self.suggestions],
            "errors": list(self.errors),
            "outcome": self.outcome.to_dict() if self.outcome else None,
            "timestamp": self.timestamp,
        }


ApprovalHandler = Callable[[Candidate], Union[bool, Awaitable[bool]]]


class CommandOrchestrator:
    """
    Resolve free-text commands to catalog actions and run them.

    Args:
        catalog: Action catalog (only written to by ``builtin_help``)
        scope_provider: Supplies the current ScopeContext
        matcher: Text matcher (exact + fuzzy by default)
        extractor: Argument extractor (pattern + entity by default)
        executor: Action executor (direct, navigation, DOM by default)
        suggestion_engine: "Did you mean?" engine
        settings: Thresholds and limits
        approval_handler: Optional sync or async callable deciding whether a
            candidate that requires approval may run
        navigate: Navigation handler for the default executor
        builtin_help: Register a global "help" action listing the
            available commands
    """

    def __init__(
        self,
        catalog: ActionCatalog,
        scope_provider: Optional[ScopeProvider] = None,
        matcher: Optional[ActionMatcher] = None,
        extractor: Optional[ArgumentExtractor] = None,
        executor: Optional[ActionExecutor] = None,
        suggestion_engine: Optional[SuggestionEngine] = None,
        settings: Optional[ResolverSettings] = None,
        approval_handler: Optional[ApprovalHandler] = None,
        navigate: Optional[NavigateHandler] = None,
        builtin_help: bool = False,
    ):
        self.catalog = catalog
        self.settings = settings or DEFAULT_SETTINGS
        self.scope_provider = scope_provider or StaticScopeProvider()
        self.matcher = matcher or ActionMatcher(settings=self.settings)
        self.extractor = extractor or ArgumentExtractor(settings=self.settings)
        self.executor = executor or ActionExecutor(
            navigate=navigate, route_resolver=catalog.route_for
        )
        self.suggestion_engine = suggestion_engine or SuggestionEngine(self.settings)
        self.approval_handler = approval_handler
        if builtin_help:
            self.register_help_action()

    def register_matcher_strategy(self, strategy: MatcherStrategy) -> None:
        """Plug in another matching strategy (e.g. a semantic one)."""
        self.matcher.register_strategy(strategy)

    def register_help_action(self) -> ActionDescriptor:
        """Register the built-in "help" action unless the catalog already has one."""
        existing = self.catalog.get(HELP_ACTION_ID)
        if existing is not None:
            return existing
        return self.catalog.register(ActionDescriptor(
            id=HELP_ACTION_ID,
            name="help",
            description="List the commands available here",
            examples=list(HELP_EXAMPLES),
            category=ActionCategory.SYSTEM,
            danger_level=DangerLevel.SAFE,
            requires_approval=False,
            handler=self.show_help,
        ))

    def show_help(self, *_args: Any) -> ExecutionOutcome:
        commands = [c for c in self.get_available_commands() if c not in HELP_EXAMPLES]
        if not commands:
            return ExecutionOutcome(success=True, message="No commands are available here.", data=[])
        lines = "\n".join(f'• "{command}"' for command in commands)
        return ExecutionOutcome(
            success=True,
            message=f"Available commands:\n{lines}",
            data=commands,
        )

    def _hint(self) -> str:
        return HELP_HINT if HELP_ACTION_ID in self.catalog else REPHRASE_HINT

    def current_scope(self) -> ScopeContext:
        return self.scope_provider.get_current_scope()

    def visible_actions(self) -> List[ActionDescriptor]:
        return self.catalog.resolve_for_context(self.current_scope())

    # ---------------------------
    # Resolution
    # ---------------------------
    async def find_candidates(self, query: str, top_n: Optional[int] = None) -> List[Candidate]:
        """
        Rank the actions visible in the current scope against ``query``.

        Returns:
            Up to ``top_n`` candidates (candidate_limit by default), best first
        """
        scope = self.current_scope()
        actions = self.catalog.resolve_for_context(scope)
        logger.debug(f"Resolving '{query}' at {scope.location} over {len(actions)} actions")

        matches = await self.matcher.find_matches(
            query,
            actions,
            scope,
            top_n if top_n is not None else self.settings.candidate_limit,
        )
        candidates = [
            Candidate(
                query=query,
                action=match.action,
                confidence=match.confidence,
                arguments=list(match.arguments),
                reasoning=match.reasoning,
                requires_approval=match.action.effective_requires_approval,
            )
            for match in matches
        ]
        logger.info(
            f"Found {len(candidates)} candidates for '{query}': "
            f"{[f'{c.action.name} ({c.confidence}%)' for c in candidates]}"
        )
        return candidates

    # ---------------------------
    # Execution chain
    # ---------------------------
    async def run_chain(
        self,
        candidates: List[Candidate],
        stop_after_first_attempt: bool = False,
        original_query: Optional[str] = None,
    ) -> CommandResponse:
        """
        Try candidates in order until one executes successfully.

        Args:
            candidates: Candidates in the order to try them
            stop_after_first_attempt: Give up after the first failed attempt
            original_query: Query used for failure suggestions

        Returns:
            Success response naming the executed action, or a failure
            response with the accumulated errors and suggestions
        """
        if not candidates:
            return self._no_match_response(original_query)

        errors: List[str] = []
        for candidate in candidates:
            outcome = await self._attempt(candidate)
            if outcome.success:
                return CommandResponse(
                    success=True,
                    message=f"✅ {outcome.message}",
                    executed_action=candidate.action.name,
                    confidence=candidate.confidence,
                    errors=errors,
                    outcome=outcome,
                )

            errors.append(outcome.error or outcome.message)
            logger.warning(f"Candidate {candidate.action.id} failed: {errors[-1]}")
            if stop_after_first_attempt:
                break

        return self._failure_response(original_query or candidates[0].query, errors)

    async def _attempt(self, candidate: Candidate) -> ExecutionOutcome:
        action = candidate.action

        if candidate.requires_approval and self.approval_handler is not None:
            try:
                approved = await maybe_await(self.approval_handler(candidate))
            except Exception as e:
                logger.error(f"Approval handler failed for {action.id}: {e}", exc_info=True)
                approved = False
            if not approved:
                message = f"Approval denied for {action.name}"
                return ExecutionOutcome(success=False, message=message, error=message)

        try:
            extraction = await self.extractor.extract(candidate.query, action)
        except Exception as e:
            logger.warning(f"Argument extraction failed for {action.id}: {e}")
            extraction = ExtractionResult.empty()
        arguments = extraction.arguments or candidate.arguments
        logger.debug(f"Executing {action.id} with {arguments}")

        try:
            return await self.executor.execute(action, arguments)
        except Exception as e:
            logger.error(f"Executor raised for {action.id}: {e}", exc_info=True)
            return ExecutionOutcome(success=False, message=str(e), error=str(e))

    def _no_match_response(self, query: Optional[str]) -> CommandResponse:
        suggestions: List[Suggestion] = []
        if query:
            suggestions = self.suggestion_engine.get_suggestions(query, self.visible_actions())
        if suggestions:
            body = self.suggestion_engine.format_suggestions(suggestions)
        else:
            examples = self.get_available_commands()[:EXAMPLE_FALLBACK_LIMIT]
            suggestions = [Suggestion(text=ex, confidence=0, type=EXAMPLE) for ex in examples]
            if examples:
                body = "💡 Try:\n" + "\n".join(f'• "{ex}"' for ex in examples)
            else:
                body = self._hint()
        return CommandResponse(
            success=False,
            message=f"{NO_MATCH_MESSAGE}\n\n{body}",
            suggestions=suggestions,
        )

    def _failure_response(self, query: str, errors: List[str]) -> CommandResponse:
        suggestions = self.suggestion_engine.get_suggestions(
            query,
            self.visible_actions(),
            self.settings.failure_suggestion_limit,
        )
        hint = self.suggestion_engine.format_suggestions(suggestions) if suggestions else self._hint()
        last_error = errors[-1] if errors else "Unknown error"
        return CommandResponse(
            success=False,
            message=f"❌ {last_error}\n\n{hint}",
            suggestions=suggestions,
            errors=errors,
        )

    # ---------------------------
    # Convenience
    # ---------------------------
    async def process_query(self, query: str) -> CommandResponse:
        """Find candidates for ``query`` and run the full chain."""
        candidates = await self.find_candidates(query)
        return await self.run_chain(candidates, stop_after_first_attempt=False, original_query=query)

    def get_available_commands(self) -> List[str]:
        """Example phrases of the actions visible in the current scope."""
        commands: List[str] = []
        for action in self.visible_actions():
            commands.extend(action.examples)
        return commands

    def get_suggestions(self, partial_query: str) -> List[str]:
        """Suggestion texts for a partial query, across the whole catalog."""
        suggestions = self.suggestion_engine.get_suggestions(partial_query, self.catalog.all())
        return [s.text for s in suggestions]
