import logging
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from .config.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Container:
    """Factory registry resolving the candidate source and search service."""

    _factories: dict[type, Callable[[], Any]] = field(default_factory=dict)
    _singletons: dict[type, Any] = field(default_factory=dict)
    _singleton_flags: set[type] = field(default_factory=set)

    def register(
        self, interface: type[T], factory: Callable[[], T], singleton: bool = False
    ) -> None:
        """Register factory for interface.

        Args:
            interface: Interface type.
            factory: Factory function.
            singleton: Whether to cache instance.
        """
        self._factories[interface] = factory
        self._singletons.pop(interface, None)
        if singleton:
            self._singleton_flags.add(interface)
        else:
            self._singleton_flags.discard(interface)

    def override(self, interface: type[T], instance: T) -> None:
        """Serve a prebuilt instance, e.g. a stub candidate source.

        Cached singletons are dropped so services built on the old
        dependency are rebuilt on next resolve.
        """
        self._singletons.clear()
        self.register(interface, lambda: instance, singleton=True)

    def resolve(self, interface: type[T]) -> T:
        if interface in self._singletons:
            return self._singletons[interface]

        if interface not in self._factories:
            raise KeyError(f"No factory registered for {interface.__name__}")

        instance = self._factories[interface]()

        if interface in self._singleton_flags:
            self._singletons[interface] = instance

        return instance

    def reset(self) -> None:
        """Drop cached singletons, keeping registrations."""
        self._singletons.clear()

    def clear(self) -> None:
        """Drop all registrations."""
        self._factories.clear()
        self._singletons.clear()
        self._singleton_flags.clear()


container = Container()


def _make_candidate_source(settings: Settings):
    from .infrastructure.candidate_sources import (
        InMemoryCandidateSource,
        SqliteCandidateSource,
    )

    if settings.candidate_source == "sqlite":
        return SqliteCandidateSource(settings.sqlite_path)
    if settings.candidate_source == "json":
        return InMemoryCandidateSource.from_json(settings.corpus_path)
    raise ValueError(f"Unknown candidate source: {settings.candidate_source}")


def configure_container(settings: Settings) -> Container:
    """Configure container with all dependencies.

    Args:
        settings: Application settings.

    Returns:
        Configured container.
    """
    from .core.protocols.candidate_source import CandidateSourceProtocol
    from .core.services.search_service import SearchService
    from .core.strategies.scoring import QuestionSimilarity

    container.clear()

    container.register(
        CandidateSourceProtocol,
        lambda: _make_candidate_source(settings),
        singleton=True,
    )

    container.register(
        SearchService,
        lambda: SearchService(
            candidate_source=container.resolve(CandidateSourceProtocol),
            title_match_weight=settings.title_match_weight,
            content_match_weight=settings.content_match_weight,
            similarity_threshold=settings.similarity_threshold,
            max_fuzzy_candidates=settings.max_fuzzy_candidates,
            similarity=QuestionSimilarity(
                title_weight=settings.related_title_weight,
                content_weight=settings.related_content_weight,
                tag_weight=settings.related_tag_weight,
                subject_bonus=settings.related_subject_bonus,
            ),
        ),
        singleton=True,
    )

    logger.info(f"Container configured (candidate source: {settings.candidate_source})")
    return container
