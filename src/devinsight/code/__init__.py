"""Code analytics: evolution history, technical debt, architecture and findings."""

from .engine import TREND_METRICS, CodeAnalyticsEngine
from .models import (
    ArchitectureQualityMetrics,
    BugPrediction,
    ChangeSummary,
    CodeEvolutionSnapshot,
    CodeQualityBreakdown,
    DebtIssue,
    DeveloperActivity,
    DeveloperProductivityMetrics,
    FileSignals,
    PerformanceBottleneckPrediction,
    PerformanceSignal,
    RefactoringOpportunity,
    SecurityFinding,
    SecurityRisk,
    SecurityRiskAssessment,
    TechnicalDebtAnalysis,
)
from .protocols import CodeSource
from .scoring import QUALITY_WEIGHTS

__all__ = [
    "CodeAnalyticsEngine",
    "CodeSource",
    "TREND_METRICS",
    "QUALITY_WEIGHTS",
    "ArchitectureQualityMetrics",
    "BugPrediction",
    "ChangeSummary",
    "CodeEvolutionSnapshot",
    "CodeQualityBreakdown",
    "DebtIssue",
    "DeveloperActivity",
    "DeveloperProductivityMetrics",
    "FileSignals",
    "PerformanceBottleneckPrediction",
    "PerformanceSignal",
    "RefactoringOpportunity",
    "SecurityFinding",
    "SecurityRisk",
    "SecurityRiskAssessment",
    "TechnicalDebtAnalysis",
]
