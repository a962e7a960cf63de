"""
Action Model

Descriptors for the callable actions exposed to text-driven resolution,
the tagged invocation variants that select an execution path, and the
keyword-table classifier used to infer category and danger level from a
method name.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union
import logging

logger = logging.getLogger("ActionResolver.Actions")

GLOBAL_SCOPE = "global"


class DangerLevel(Enum):
    """How risky an action is to run without a human in the loop."""
    SAFE = "safe"
    MODERATE = "moderate"
    DANGEROUS = "dangerous"
    DESTRUCTIVE = "destructive"


APPROVAL_DANGER_LEVELS = frozenset({DangerLevel.DANGEROUS, DangerLevel.DESTRUCTIVE})


class ScopeMatch(Enum):
    """How an action's scope route is compared with the current path."""
    PREFIX = "prefix"  # "/blog" matches "/blog" and "/blog/my-post"
    EXACT = "exact"    # "/blog" matches "/blog" only


class ActionCategory:
    """Well-known category labels (categories are free-form strings)."""
    NAVIGATION = "navigation"
    USER_INTERACTION = "user_interaction"
    DATA = "data"
    SEARCH = "search"
    CONTENT = "content"
    THEME = "theme"
    FORM = "form"
    STATE = "state"
    SYSTEM = "system"
    UTILITY = "utility"


# Categories whose scoped actions only apply on their exact route, so they
# do not leak into nested detail views.
EXACT_PATH_CATEGORIES = frozenset({ActionCategory.SEARCH, ActionCategory.CONTENT})


# ---------------------------
# Invocation variants
# ---------------------------
@dataclass(frozen=True)
class DirectCall:
    """Invoke a Python callable (bound method or function) directly."""
    target: Callable[..., Any]
    instance: Any = None


@dataclass(frozen=True)
class Navigation:
    """Change route; prefer ``call`` when the action also has a callable."""
    target: Optional[str] = None
    call: Optional[DirectCall] = None


@dataclass(frozen=True)
class DomAction:
    """Operate a live UI element located by its identifier."""
    element_id: str


ActionInvocation = Union[DirectCall, Navigation, DomAction]


# ---------------------------
# Classification
# ---------------------------
@dataclass(frozen=True)
class ActionClassification:
    category: str
    danger_level: DangerLevel
    requires_approval: bool


DESTRUCTIVE_KEYWORDS = ("delete", "remove", "destroy", "purge", "wipe")
DANGEROUS_KEYWORDS = ("approve", "reject", "ban", "suspend", "disable")
MODERATE_KEYWORDS = ("create", "update", "modify", "assign", "change")
APPROVAL_MODERATE_KEYWORDS = ("approve", "reject", "assign")

CATEGORY_PREFIXES = (
    (ActionCategory.USER_INTERACTION, ("click", "press", "tap")),
    (ActionCategory.NAVIGATION, ("navigate", "goto", "go_to", "go to")),
    (ActionCategory.DATA, (
        "create", "add", "insert",
        "read", "get", "fetch", "load",
        "update", "modify", "edit", "change",
        "delete", "remove", "destroy",
    )),
    (ActionCategory.SEARCH, ("list", "find", "search", "query")),
)
USER_INTERACTION_INFIXES = ("button", "link")
SYSTEM_INFIXES = ("sync", "cloud", "backup")


def infer_danger_level(name: str) -> DangerLevel:
    lowered = (name or "").lower()
    if any(word in lowered for word in DESTRUCTIVE_KEYWORDS):
        return DangerLevel.DESTRUCTIVE
    if any(word in lowered for word in DANGEROUS_KEYWORDS):
        return DangerLevel.DANGEROUS
    if any(word in lowered for word in MODERATE_KEYWORDS):
        return DangerLevel.MODERATE
    return DangerLevel.SAFE


def infer_category(name: str) -> str:
    lowered = (name or "").lower()
    if any(word in lowered for word in USER_INTERACTION_INFIXES):
        return ActionCategory.USER_INTERACTION
    for category, prefixes in CATEGORY_PREFIXES:
        if lowered.startswith(prefixes):
            return category
    if "navigate" in lowered:
        return ActionCategory.NAVIGATION
    if any(word in lowered for word in SYSTEM_INFIXES):
        return ActionCategory.SYSTEM
    return ActionCategory.UTILITY


def requires_approval_for(name: str, danger_level: Optional[DangerLevel] = None) -> bool:
    """Dangerous/destructive always need approval; some moderate verbs do too."""
    level = danger_level or infer_danger_level(name)
    if level in APPROVAL_DANGER_LEVELS:
        return True
    if level is DangerLevel.MODERATE:
        lowered = (name or "").lower()
        return any(word in lowered for word in APPROVAL_MODERATE_KEYWORDS)
    return False


def classify(name: str) -> ActionClassification:
    """
    Infer category, danger level and approval requirement from a method name.

    The keyword tables above are the whole rule set:

    - danger: delete/remove/destroy/purge/wipe -> destructive;
      approve/reject/ban/suspend/disable -> dangerous;
      create/update/modify/assign/change -> moderate; otherwise safe.
    - category: button/link or click/press/tap prefix -> user_interaction;
      navigate/goto prefix -> navigation; CRUD verbs -> data;
      list/find/search/query -> search; sync/cloud/backup -> system;
      otherwise utility.

    Args:
        name: Method or action name (camelCase, snake_case or words)

    Returns:
        ActionClassification for the name
    """
    danger = infer_danger_level(name)
    return ActionClassification(
        category=infer_category(name),
        danger_level=danger,
        requires_approval=requires_approval_for(name, danger),
    )


def coerce_danger_level(value: Union[str, DangerLevel, None]) -> Optional[DangerLevel]:
    if value is None or isinstance(value, DangerLevel):
        return value
    try:
        return DangerLevel(str(value).lower())
    except ValueError:
        raise ValueError(
            f"Unknown danger level {value!r}; expected one of "
            f"{[level.value for level in DangerLevel]}"
        )


def coerce_scope_match(value: Union[str, ScopeMatch, None]) -> Optional[ScopeMatch]:
    if value is None or isinstance(value, ScopeMatch):
        return value
    try:
        return ScopeMatch(str(value).lower())
    except ValueError:
        raise ValueError(f"Unknown scope match {value!r}; expected 'prefix' or 'exact'")


# ---------------------------
# Descriptor
# ---------------------------
@dataclass
class ActionDescriptor:
    """
    A registered, callable capability.

    Attributes:
        id: Unique identifier (catalog key)
        name: Display name, also matched against queries
        description: Human description (keyword overlap source)
        examples: Natural-language example phrases; may contain one
            ``{placeholder}`` token
        element_id: Identifier of the UI element this action operates
        scope: Route ("/blog"), container label ("Blog") or "global"
        pages: Explicit list of pages/paths where the action applies
        scope_match: Prefix or exact route comparison (derived from the
            category when unset)
        category: Free-form category label (see ActionCategory)
        danger_level: Risk classification (inferred when unset)
        requires_approval: Declared approval flag (inferred when unset)
        handler: Callable to invoke directly
        instance: Owning instance, used with ``method_name``
        method_name: Name of the method on ``instance``
        execution_hint: "call", "navigation" or "dom" to force a path
        route: Navigation target route
        provider: Owning provider (class) name, for defaults and binding
        keywords: Extra search keywords
        input_schema: JSON schema of the arguments (RPC listing)
        invocation: Execution variant, resolved once at registration
    """
    id: str
    name: str
    description: str = ""
    examples: List[str] = field(default_factory=list)
    element_id: Optional[str] = None
    scope: Optional[str] = None
    pages: List[str] = field(default_factory=list)
    scope_match: Optional[ScopeMatch] = None
    category: Optional[str] = None
    danger_level: Optional[DangerLevel] = None
    requires_approval: Optional[bool] = None
    handler: Optional[Callable[..., Any]] = None
    instance: Any = None
    method_name: Optional[str] = None
    execution_hint: Optional[str] = None
    route: Optional[str] = None
    provider: Optional[str] = None
    keywords: List[str] = field(default_factory=list)
    input_schema: Optional[Dict[str, Any]] = None
    invocation: Optional[ActionInvocation] = None

    def __post_init__(self):
        self.danger_level = coerce_danger_level(self.danger_level)
        self.scope_match = coerce_scope_match(self.scope_match)

    @property
    def is_global(self) -> bool:
        """No scope, no page list, no UI element: available everywhere."""
        return (
            not self.element_id
            and not self.pages
            and (not self.scope or self.scope == GLOBAL_SCOPE)
        )

    @property
    def effective_scope_match(self) -> ScopeMatch:
        if self.scope_match is not None:
            return self.scope_match
        if self.category in EXACT_PATH_CATEGORIES:
            return ScopeMatch.EXACT
        return ScopeMatch.PREFIX

    @property
    def is_navigation(self) -> bool:
        """Navigation by category, hint, or name/description heuristics."""
        if self.category == ActionCategory.NAVIGATION:
            return True
        if self.execution_hint == "navigation":
            return True
        name = self.name.lower()
        return (
            "navigate" in name
            or "go to" in name
            or "navigate" in (self.description or "").lower()
        )

    @property
    def effective_requires_approval(self) -> bool:
        return bool(self.requires_approval) or self.danger_level in APPROVAL_DANGER_LEVELS

    def backfill(self, **defaults: Any) -> List[str]:
        """
        Fill absent fields from defaults; explicit values are never overwritten.

        Returns:
            Names of the fields that were filled
        """
        known = {f.name for f in fields(self)}
        filled = []
        for key, value in defaults.items():
            if key not in known:
                logger.warning(f"Ignoring unknown default '{key}' for action {self.id}")
                continue
            if value is None:
                continue
            current = getattr(self, key)
            if current is None or current == [] or current == "":
                if key == "danger_level":
                    value = coerce_danger_level(value)
                elif key == "scope_match":
                    value = coerce_scope_match(value)
                setattr(self, key, value)
                filled.append(key)
        return filled

    def resolve_call(self) -> Optional[DirectCall]:
        if self.handler is not None:
            return DirectCall(target=self.handler, instance=self.instance)
        if self.instance is not None and self.method_name:
            target = getattr(self.instance, self.method_name, None)
            if callable(target):
                return DirectCall(target=target, instance=self.instance)
        return None

    def resolve_invocation(self) -> Optional[ActionInvocation]:
        """
        Pick exactly one execution variant for this action.

        An explicit ``execution_hint`` wins when it can be satisfied;
        otherwise navigation actions get a Navigation variant (wrapping the
        direct call when one exists), then a direct call, then a DOM action
        for element-bound actions without an owning instance. Returns None
        when nothing can run the action; that surfaces at call time.
        """
        call = self.resolve_call()
        dom_ok = bool(self.element_id) and self.instance is None

        if self.execution_hint == "call" and call:
            return call
        if self.execution_hint == "dom" and dom_ok:
            return DomAction(element_id=self.element_id)

        if self.is_navigation:
            target = self.route or self.scope or self.element_id
            if target == GLOBAL_SCOPE:
                target = None
            if call or target:
                return Navigation(target=target, call=call)

        if call:
            return call
        if dom_ok:
            return DomAction(element_id=self.element_id)
        return None
