"""
DevInsight - code and cognitive analytics with ranked insights

Derives code evolution, technical debt, architecture and quality scores from
a code source, health classifications from reasoning/learning telemetry, and
turns both into prioritized insights with a feedback loop.
"""

__version__ = "0.1.0"

from .api import Engines, build_engines
from .code import CodeAnalyticsEngine
from .cognitive import CognitiveAnalyticsEngine, TelemetryRecorder
from .config import AnalyticsConfig, ThresholdConfig, load_config
from .insights import GeneratedInsight, InsightGenerationEngine
from .models import TimeRange

__all__ = [
    "build_engines",  # Main entry point
    "Engines",
    "CodeAnalyticsEngine",
    "CognitiveAnalyticsEngine",
    "InsightGenerationEngine",
    "TelemetryRecorder",
    "GeneratedInsight",
    "AnalyticsConfig",
    "ThresholdConfig",
    "load_config",
    "TimeRange",
]
