"""
Redaction Strategy Registry.

This module provides the closed set of redaction strategy kinds and a
registry that maps each kind to a factory producing a strategy object.
Every strategy exposes the same contract:

    apply(image: PixelBuffer, regions: Iterable[Rect], radius) -> PixelBuffer

Classes:
    StrategyKind: Tagged strategy variants
    RedactionStrategyRegistry: Registry for strategy factories

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_strategies: Register the three built-in strategies
    resolve_strategy_kind: Parse a kind from an enum member, name or value
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

logger = logging.getLogger(__name__)


class StrategyKind(Enum):
    CONVOLUTION = "convolution"
    COMPOSITE = "composite"
    FILL = "fill"


# Type alias for strategy factory
StrategyFactory = Callable[[], Any]


def resolve_strategy_kind(kind: Union[StrategyKind, str]) -> StrategyKind:
    """
    Resolve a strategy kind.

    Accepts a StrategyKind, its value ("fill") or its name ("FILL").

    Raises:
        KeyError: If the kind is unknown
    """
    if isinstance(kind, StrategyKind):
        return kind

    text = str(kind).strip()
    for member in StrategyKind:
        if text.lower() == member.value or text.upper() == member.name:
            return member

    valid = ", ".join(member.value for member in StrategyKind)
    raise KeyError(f"Unknown strategy kind '{kind}'. Valid kinds: {valid}")


class RedactionStrategyRegistry:
    """
    Registry for redaction strategy factories.

    Example:
        >>> registry = RedactionStrategyRegistry()
        >>> registry.register(StrategyKind.FILL, FillStrategy, description="Flat fill")
        >>> strategy = registry.get_strategy("fill")
        >>> redacted = strategy.apply(buffer, rects, radius=0)
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._factories: Dict[StrategyKind, StrategyFactory] = {}
        self._metadata: Dict[StrategyKind, Dict[str, Any]] = {}

    def register(
        self,
        kind: Union[StrategyKind, str],
        factory: StrategyFactory,
        description: str = "",
        tags: Optional[List[str]] = None,
    ) -> None:
        """
        Register a strategy factory.

        Args:
            kind: Strategy kind (enum member, name or value)
            factory: Zero-argument callable returning a strategy object
            description: Human-readable description
            tags: Optional list of tags for categorization (e.g., ["blur"])

        Raises:
            KeyError: If kind is not a known StrategyKind
            ValueError: If factory is not callable
            RuntimeError: If kind is already registered
        """
        kind = resolve_strategy_kind(kind)

        if not callable(factory):
            raise ValueError(f"factory must be callable, got {type(factory)}")

        if kind in self._factories:
            raise RuntimeError(
                f"Strategy '{kind.value}' is already registered. "
                f"Use unregister() first to replace it."
            )

        self._factories[kind] = factory
        self._metadata[kind] = {
            "description": str(description),
            "tags": list(tags) if tags else [],
        }

        logger.debug(f"Registered redaction strategy: {kind.value}")

    def unregister(self, kind: Union[StrategyKind, str]) -> bool:
        """
        Unregister a strategy.

        Returns:
            True if unregistered, False if kind was not registered
        """
        kind = resolve_strategy_kind(kind)

        if kind in self._factories:
            del self._factories[kind]
            del self._metadata[kind]
            logger.debug(f"Unregistered redaction strategy: {kind.value}")
            return True

        return False

    def get_strategy(self, kind: Union[StrategyKind, str]) -> Any:
        """
        Build a strategy instance for a kind.

        Raises:
            KeyError: If kind is unknown or not registered
        """
        kind = resolve_strategy_kind(kind)

        if kind not in self._factories:
            available = ", ".join(self.list_kinds())
            raise KeyError(
                f"No strategy registered for '{kind.value}'. "
                f"Available strategies: {available}"
            )

        return self._factories[kind]()

    def has_strategy(self, kind: Union[StrategyKind, str]) -> bool:
        try:
            return resolve_strategy_kind(kind) in self._factories
        except KeyError:
            return False

    def list_kinds(self) -> List[str]:
        """Sorted list of registered strategy values."""
        return sorted(kind.value for kind in self._factories)

    def get_metadata(self, kind: Union[StrategyKind, str]) -> Dict[str, Any]:
        kind = resolve_strategy_kind(kind)

        if kind not in self._metadata:
            raise KeyError(f"No metadata for strategy: {kind.value}")

        return dict(self._metadata[kind])

    def filter_by_tag(self, tag: str) -> List[str]:
        """Sorted list of strategy values carrying a tag."""
        tag = str(tag).strip().lower()
        return sorted(
            kind.value
            for kind, meta in self._metadata.items()
            if tag in [t.lower() for t in meta.get("tags", [])]
        )

    def clear(self) -> None:
        """Clear all registered strategies. Use with caution."""
        self._factories.clear()
        self._metadata.clear()
        logger.warning("Redaction strategy registry cleared")


# Global singleton registry
_default_registry: Optional[RedactionStrategyRegistry] = None


def get_default_registry() -> RedactionStrategyRegistry:
    """
    Get the global default registry (singleton).

    Creates the registry on first call and registers the built-in strategies.
    """
    global _default_registry

    if _default_registry is None:
        _default_registry = RedactionStrategyRegistry()
        register_default_strategies(_default_registry)

    return _default_registry


def register_default_strategies(registry: RedactionStrategyRegistry) -> None:
    """
    Register the built-in strategies:
    - Convolution blur
    - Composite blur
    - Flat fill
    """
    from PB_Libs.RedactionLib.convolution_blur import ConvolutionBlurStrategy
    from PB_Libs.RedactionLib.composite_blur import CompositeBlurStrategy
    from PB_Libs.RedactionLib.fill_strategy import FillStrategy

    registry.register(
        kind=StrategyKind.CONVOLUTION,
        factory=ConvolutionBlurStrategy,
        description="Per-region kernel convolution with smoothed edges",
        tags=["blur", "precise"],
    )

    registry.register(
        kind=StrategyKind.COMPOSITE,
        factory=CompositeBlurStrategy,
        description="Whole-image Gaussian blur composited through a feathered matte",
        tags=["blur", "fast"],
    )

    registry.register(
        kind=StrategyKind.FILL,
        factory=FillStrategy,
        description="Flat fill with the dominant image color",
        tags=["fill", "fast"],
    )

    logger.info("Registered default redaction strategies")
