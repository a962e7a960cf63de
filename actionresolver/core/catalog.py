"""
Action Catalog

Registry of ActionDescriptors and the scoping rules that decide which
actions are valid in a given ScopeContext.

The catalog is an explicit object: construct one per host process (or per
test), pass it to the matcher/executor/orchestrator, and call ``clear()``
for isolation. Registration is expected to happen at startup from a single
thread of control; registration and resolution are not synchronized.
"""

from collections import defaultdict
from typing import Any, Dict, Iterator, List, Optional
import logging

from actionresolver.core.actions import (
    GLOBAL_SCOPE,
    ActionDescriptor,
    DangerLevel,
    ScopeMatch,
    classify,
)
from actionresolver.core.scope import ScopeContext

logger = logging.getLogger("ActionResolver.Catalog")


class CatalogError(ValueError):
    """Raised for descriptors the catalog cannot store."""


class ActionCatalog:
    """
    Stores actions by id and resolves the ones available in a scope.

    Resolution order is: actions scoped to the current location (visible UI
    element, explicit page list, or route match), then global actions, then
    navigation actions from other scopes so navigation shortcuts stay
    reachable everywhere.
    """

    def __init__(self):
        """Initialize an empty catalog."""
        self._actions: Dict[str, ActionDescriptor] = {}
        self._container_routes: Dict[str, str] = {}
        self._label_only_warned: set = set()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register(self, action: ActionDescriptor) -> ActionDescriptor:
        """
        Store an action, replacing any existing action with the same id.

        Category, danger level and approval flag are inferred from the
        method/action name when the descriptor leaves them unset, and the
        invocation variant is resolved once here.

        Args:
            action: Descriptor to register

        Returns:
            The registered descriptor

        Raises:
            CatalogError: If the descriptor has no id
        """
        if not action.id or not str(action.id).strip():
            raise CatalogError(f"Action '{action.name}' has no id")

        classification = classify(action.method_name or action.name)
        action.backfill(
            category=classification.category,
            danger_level=classification.danger_level,
            requires_approval=classification.requires_approval,
        )
        if action.invocation is None:
            action.invocation = action.resolve_invocation()

        if action.id in self._actions:
            logger.debug(f"Replacing action {action.id}")
        self._actions[action.id] = action
        logger.info(
            f"Registered action: {action.name} "
            f"(id={action.id}, category={action.category}, danger={action.danger_level.value})"
        )
        return action

    def unregister(self, action_id: str) -> Optional[ActionDescriptor]:
        return self._actions.pop(action_id, None)

    def clear(self) -> None:
        """Remove all actions and container routes."""
        self._actions.clear()
        self._container_routes.clear()
        self._label_only_warned.clear()
        logger.debug("Catalog cleared")

    def register_container(self, container_id: str, route: str) -> None:
        """Map a container/scope label to the route it lives on."""
        self._container_routes[container_id] = route

    def route_for(self, scope: Optional[str]) -> Optional[str]:
        """
        Resolve a scope identifier to a route.

        Routes ("/blog") resolve to themselves, known container labels to
        their registered route; anything else resolves to None.
        """
        if not scope or scope == GLOBAL_SCOPE:
            return None
        if scope.startswith("/"):
            return scope
        return self._container_routes.get(scope)

    def apply_provider_defaults(self, provider: str, **defaults: Any) -> int:
        """
        Backfill absent fields on every action owned by ``provider``.

        Returns:
            Number of actions that had at least one field filled
        """
        updated = 0
        for action in self.by_provider(provider):
            filled = action.backfill(**defaults)
            if filled:
                updated += 1
                if {"handler", "instance", "method_name", "execution_hint", "route",
                        "scope", "category", "element_id"} & set(filled):
                    action.invocation = action.resolve_invocation()
        return updated

    def bind_instance(self, instance: Any, provider: Optional[str] = None) -> int:
        """
        Attach an owning instance to the provider's method-backed actions.

        Args:
            instance: Object whose methods implement the actions
            provider: Provider name (defaults to the instance's class name)

        Returns:
            Number of actions bound
        """
        provider = provider or type(instance).__name__
        bound = 0
        for action in self.by_provider(provider):
            if not action.method_name:
                continue
            if not callable(getattr(instance, action.method_name, None)):
                logger.warning(
                    f"{provider} has no method '{action.method_name}' for action {action.id}"
                )
                continue
            action.instance = instance
            action.invocation = action.resolve_invocation()
            bound += 1
        logger.debug(f"Bound {bound} action(s) to {provider} instance")
        return bound

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def get(self, action_id: str) -> Optional[ActionDescriptor]:
        return self._actions.get(action_id)

    def all(self) -> List[ActionDescriptor]:
        return list(self._actions.values())

    def __len__(self) -> int:
        return len(self._actions)

    def __contains__(self, action_id: object) -> bool:
        return action_id in self._actions

    def __iter__(self) -> Iterator[ActionDescriptor]:
        return iter(list(self._actions.values()))

    def by_category(self, category: str) -> List[ActionDescriptor]:
        return [a for a in self._actions.values() if a.category == category]

    def by_scope(self, scope: str) -> List[ActionDescriptor]:
        if scope == GLOBAL_SCOPE:
            return [a for a in self._actions.values() if not a.scope or a.scope == GLOBAL_SCOPE]
        return [a for a in self._actions.values() if a.scope == scope]

    def by_provider(self, provider: str) -> List[ActionDescriptor]:
        return [a for a in self._actions.values() if a.provider == provider]

    def grouped_by_scope(
        self, actions: Optional[List[ActionDescriptor]] = None
    ) -> Dict[str, List[ActionDescriptor]]:
        """Group actions (default: all) by scope label; unscoped under "global"."""
        grouped: Dict[str, List[ActionDescriptor]] = {GLOBAL_SCOPE: []}
        for action in self._actions.values() if actions is None else actions:
            grouped.setdefault(action.scope or GLOBAL_SCOPE, []).append(action)
        return grouped

    def search(self, query: str) -> List[ActionDescriptor]:
        """Substring search across name, description, category, examples, keywords."""
        if not query or not isinstance(query, str):
            return []
        needle = query.lower().strip()
        results = []
        for action in self._actions.values():
            fields_ = [action.name, action.description, action.category or ""]
            fields_.extend(action.examples)
            fields_.extend(action.keywords)
            haystack = [f.lower() for f in fields_ if f]
            if any(needle in f or f in needle for f in haystack):
                results.append(action)
        return results

    def stats(self) -> Dict[str, Any]:
        """Totals by category and danger level plus the approval count."""
        by_category: Dict[str, int] = defaultdict(int)
        by_danger = {level.value: 0 for level in DangerLevel}
        for action in self._actions.values():
            by_category[action.category or "uncategorized"] += 1
            if action.danger_level is not None:
                by_danger[action.danger_level.value] += 1
        return {
            "total": len(self._actions),
            "by_category": dict(by_category),
            "by_danger_level": by_danger,
            "requires_approval": sum(
                1 for a in self._actions.values() if a.effective_requires_approval
            ),
        }

    # ------------------------------------------------------------------
    # Scoping
    # ------------------------------------------------------------------
    def resolve_for_context(self, scope: Optional[ScopeContext] = None) -> List[ActionDescriptor]:
        """
        Return the actions valid in ``scope``: scoped, then global, then
        cross-scope navigation actions.

        Args:
            scope: Current scope (an empty scope when None)

        Returns:
            Ordered list of available actions
        """
        scope = scope or ScopeContext()
        scoped: List[ActionDescriptor] = []
        global_: List[ActionDescriptor] = []
        navigation: List[ActionDescriptor] = []

        for action in self._actions.values():
            placement = self._placement(action, scope)
            if placement == "scoped":
                scoped.append(action)
            elif placement == "global":
                global_.append(action)
            elif placement == "navigation":
                navigation.append(action)

        logger.debug(
            f"Resolved {len(scoped)} scoped, {len(global_)} global, "
            f"{len(navigation)} navigation action(s) for {scope.location or 'no location'}"
        )
        return scoped + global_ + navigation

    def _placement(self, action: ActionDescriptor, scope: ScopeContext) -> Optional[str]:
        # A declared UI element decides visibility on its own.
        if action.element_id:
            return "scoped" if action.element_id in scope.visible_elements else None

        if action.is_global:
            return "global"

        if action.pages and (
            (scope.current_page and scope.current_page in action.pages)
            or (scope.current_path and scope.current_path in action.pages)
        ):
            return "scoped"

        if action.scope and action.scope != GLOBAL_SCOPE:
            route = self.route_for(action.scope)
            if route is None:
                # Unknown container label: grouping only, visible everywhere.
                if action.scope not in self._label_only_warned:
                    self._label_only_warned.add(action.scope)
                    logger.warning(
                        f"Scope '{action.scope}' of action {action.id} has no known route; "
                        "treating it as a label"
                    )
                return "scoped" if action.scope in (scope.container, scope.current_page) else "global"
            mode = action.effective_scope_match
            if mode is ScopeMatch.PREFIX and action.scope in (scope.container, scope.current_page):
                return "scoped"
            if self._route_matches(route, mode, scope):
                return "scoped"

        if action.is_navigation:
            return "navigation"
        return None

    @staticmethod
    def _route_matches(route: str, mode: ScopeMatch, scope: ScopeContext) -> bool:
        if mode is ScopeMatch.EXACT or route == "/":
            path = scope.current_path or scope.current_page
            if path is None:
                return False
            return path == route or path.rstrip("/") == route.rstrip("/")

        prefix = route.rstrip("/") + "/"
        for location in (scope.current_path, scope.current_page):
            if location and (location == route or location.startswith(prefix)):
                return True
        return False
