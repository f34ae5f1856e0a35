"""
RedactionLib - Redaction strategies and engine

Modules:
    kernel: Normalized radial convolution kernels
    convolution_blur: Per-region convolution blur with edge smoothing
    composite_blur: Whole-image blur composited through a feathered matte
    fill_strategy: Flat fill with the dominant image color
    strategy_registry: Strategy kinds and factory registry
    redaction_engine: Facade over one image, its regions and a strategy
"""

from PB_Libs.RedactionLib.kernel import build_kernel
from PB_Libs.RedactionLib.convolution_blur import ConvolutionBlurStrategy
from PB_Libs.RedactionLib.composite_blur import CompositeBlurStrategy
from PB_Libs.RedactionLib.fill_strategy import FillStrategy
from PB_Libs.RedactionLib.strategy_registry import (
    StrategyKind,
    RedactionStrategyRegistry,
    get_default_registry,
)
from PB_Libs.RedactionLib.redaction_engine import RedactionConfig, RedactionEngine

__all__ = [
    "build_kernel",
    "ConvolutionBlurStrategy",
    "CompositeBlurStrategy",
    "FillStrategy",
    "StrategyKind",
    "RedactionStrategyRegistry",
    "get_default_registry",
    "RedactionConfig",
    "RedactionEngine",
]
