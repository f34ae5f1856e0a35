"""
Tests for the redaction strategy registry.
"""

import pytest

from PB_Libs.RedactionLib.convolution_blur import ConvolutionBlurStrategy
from PB_Libs.RedactionLib.fill_strategy import FillStrategy
from PB_Libs.RedactionLib.strategy_registry import (
    RedactionStrategyRegistry,
    StrategyKind,
    get_default_registry,
    register_default_strategies,
    resolve_strategy_kind,
)


class TestResolveStrategyKind:
    """Tests for resolve_strategy_kind function."""

    @pytest.mark.parametrize("raw", [StrategyKind.FILL, "fill", "FILL", " Fill "])
    def test_resolves_fill(self, raw):
        assert resolve_strategy_kind(raw) is StrategyKind.FILL

    def test_unknown_kind(self):
        with pytest.raises(KeyError):
            resolve_strategy_kind("mosaic")


class TestRedactionStrategyRegistry:
    """Tests for RedactionStrategyRegistry."""

    def test_register_and_get(self):
        registry = RedactionStrategyRegistry()
        registry.register(StrategyKind.FILL, FillStrategy, description="Flat", tags=["fill"])

        assert isinstance(registry.get_strategy("fill"), FillStrategy)
        assert registry.has_strategy(StrategyKind.FILL)
        assert registry.get_metadata("fill") == {"description": "Flat", "tags": ["fill"]}

    def test_each_get_builds_new_instance(self):
        registry = RedactionStrategyRegistry()
        registry.register(StrategyKind.FILL, FillStrategy)

        assert registry.get_strategy("fill") is not registry.get_strategy("fill")

    def test_duplicate_registration(self):
        registry = RedactionStrategyRegistry()
        registry.register(StrategyKind.FILL, FillStrategy)

        with pytest.raises(RuntimeError):
            registry.register("fill", FillStrategy)

    def test_non_callable_factory(self):
        registry = RedactionStrategyRegistry()

        with pytest.raises(ValueError):
            registry.register(StrategyKind.FILL, "FillStrategy")

    def test_unregister(self):
        registry = RedactionStrategyRegistry()
        registry.register(StrategyKind.FILL, FillStrategy)

        assert registry.unregister("fill") is True
        assert registry.unregister("fill") is False
        assert not registry.has_strategy("fill")

    def test_get_unregistered(self):
        registry = RedactionStrategyRegistry()

        with pytest.raises(KeyError):
            registry.get_strategy(StrategyKind.COMPOSITE)

    def test_has_strategy_unknown_name(self):
        assert RedactionStrategyRegistry().has_strategy("mosaic") is False

    def test_clear(self):
        registry = RedactionStrategyRegistry()
        register_default_strategies(registry)

        registry.clear()

        assert registry.list_kinds() == []


class TestDefaultRegistry:
    """Tests for the global default registry."""

    def test_singleton(self):
        assert get_default_registry() is get_default_registry()

    def test_builtin_kinds(self):
        assert get_default_registry().list_kinds() == ["composite", "convolution", "fill"]

    def test_filter_by_tag(self):
        registry = get_default_registry()

        assert registry.filter_by_tag("blur") == ["composite", "convolution"]
        assert registry.filter_by_tag("FAST") == ["composite", "fill"]

    def test_builds_convolution(self):
        strategy = get_default_registry().get_strategy(StrategyKind.CONVOLUTION)

        assert isinstance(strategy, ConvolutionBlurStrategy)
