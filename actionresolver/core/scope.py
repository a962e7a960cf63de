"""
Scope Context

Where the host application currently is: route/page, container, exact
path and the UI elements that are visible right now. The core only reads
it; the host's location/visibility tracker owns it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional


@dataclass(frozen=True)
class ScopeContext:
    """
    Snapshot of the host's location.

    Attributes:
        current_page: Route or page identifier (e.g. "/blog" or "Blog")
        container: Coarser navigation scope used for prefix matching
        current_path: Exact path (e.g. "/blog/my-post")
        visible_elements: Identifiers of visible/interactable UI elements
    """
    current_page: Optional[str] = None
    container: Optional[str] = None
    current_path: Optional[str] = None
    visible_elements: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def create(
        cls,
        current_page: Optional[str] = None,
        container: Optional[str] = None,
        current_path: Optional[str] = None,
        visible_elements: Optional[Iterable[str]] = None,
    ) -> "ScopeContext":
        return cls(
            current_page=current_page,
            container=container,
            current_path=current_path,
            visible_elements=frozenset(visible_elements or ()),
        )

    @property
    def location(self) -> Optional[str]:
        """Most specific location known: path, then page, then container."""
        return self.current_path or self.current_page or self.container


class ScopeProvider(ABC):
    """Collaborator that reports the current scope; never mutated by the core."""

    @abstractmethod
    def get_current_scope(self) -> ScopeContext:
        pass


class StaticScopeProvider(ScopeProvider):
    """Scope provider holding a fixed context, replaceable by the host."""

    def __init__(self, scope: Optional[ScopeContext] = None):
        self.scope = scope or ScopeContext()

    def set_scope(self, scope: ScopeContext) -> None:
        self.scope = scope

    def get_current_scope(self) -> ScopeContext:
        return self.scope
