"""Per-category insight rules.

Each generator reads one analytics result and returns the insights whose
trigger it crossed. A category may have several generators; they are
independent so that one failing collaborator only silences its own rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

from ..config import ThresholdConfig
from ..math import clamp
from .ids import next_insight_id
from .models import GeneratedInsight

if TYPE_CHECKING:
    from ..code.engine import CodeAnalyticsEngine
    from ..cognitive.engine import CognitiveAnalyticsEngine


@dataclass
class GenerationContext:
    """Inputs shared by every generator in one pass."""

    code: CodeAnalyticsEngine
    cognitive: CognitiveAnalyticsEngine
    workspace_id: str
    thresholds: ThresholdConfig
    timestamp: float

    def insight(
        self,
        category: str,
        rule: str,
        title: str,
        description: str,
        priority: str,
        impact: float,
        confidence: float,
        recommendations: list[str],
        supporting_data: Optional[dict[str, Any]] = None,
    ) -> GeneratedInsight:
        return GeneratedInsight(
            id=next_insight_id(category, self.timestamp),
            key=f"{category}:{rule}",
            category=category,  # type: ignore[arg-type]
            title=title,
            description=description,
            priority=priority,  # type: ignore[arg-type]
            impact=clamp(impact, 0.0, 100.0),
            confidence=clamp(confidence, 0.0, 1.0),
            recommendations=list(recommendations),
            supporting_data=supporting_data or {},
            timestamp=self.timestamp,
        )


Generator = Callable[[GenerationContext], "list[GeneratedInsight]"]


# ── Performance ───────────────────────────────────────────────────────


def cognitive_degradation(ctx: GenerationContext) -> list[GeneratedInsight]:
    health = ctx.cognitive.get_cognitive_system_health()
    if health.status == "healthy":
        return []
    return [
        ctx.insight(
            "performance",
            "cognitive-degradation",
            title="Cognitive System Performance Degradation Detected",
            description=f"The cognitive system is experiencing {health.status} performance. "
            + ". ".join(health.issues),
            priority="critical" if health.status == "critical" else "high",
            impact=85,
            confidence=0.92,
            recommendations=health.recommendations,
            supporting_data={"health": health.to_dict()},
        )
    ]


def performance_bottlenecks(ctx: GenerationContext) -> list[GeneratedInsight]:
    severe = [
        b
        for b in ctx.code.predict_performance_bottlenecks(ctx.workspace_id)
        if b.severity in ("critical", "high")
    ]
    if not severe:
        return []
    worst = severe[0]
    return [
        ctx.insight(
            "performance",
            "bottlenecks",
            title=f"{len(severe)} Performance Bottleneck(s) Identified",
            description="Critical performance issues detected that could impact application "
            f"responsiveness. {worst.description}",
            priority="high",
            impact=75,
            confidence=0.85,
            recommendations=worst.recommendations,
            supporting_data={"bottlenecks": [b.to_dict() for b in severe]},
        )
    ]


# ── Quality ───────────────────────────────────────────────────────────


def technical_debt(ctx: GenerationContext) -> list[GeneratedInsight]:
    analysis = ctx.code.analyze_technical_debt(ctx.workspace_id)
    insights = []

    if analysis.total_debt > ctx.thresholds.debt_insight_hours:
        critical = analysis.total_debt > ctx.thresholds.debt_critical_hours
        insights.append(
            ctx.insight(
                "quality",
                "high-debt",
                title="High Technical Debt Detected",
                description=f"Current technical debt is estimated at {analysis.total_debt:g} hours. "
                f"Trend is {analysis.trend}.",
                priority="critical" if critical else "high",
                impact=min(100.0, analysis.total_debt),
                confidence=0.88,
                recommendations=analysis.recommendations,
                supporting_data={"debt": analysis.to_dict()},
            )
        )

    if analysis.critical_issues:
        first = analysis.critical_issues[0]
        insights.append(
            ctx.insight(
                "quality",
                "critical-issues",
                title=f"{len(analysis.critical_issues)} Critical Quality Issue(s) Found",
                description=f"Critical issues requiring immediate attention: {first.description}",
                priority="critical",
                impact=90,
                confidence=0.95,
                recommendations=[f"Fix critical issue in {first.location}"],
                supporting_data={"issues": [i.to_dict() for i in analysis.critical_issues]},
            )
        )

    return insights


# ── Productivity ──────────────────────────────────────────────────────


def refactoring_opportunities(ctx: GenerationContext) -> list[GeneratedInsight]:
    high = [
        op for op in ctx.code.identify_refactoring_opportunities(ctx.workspace_id) if op.priority == "high"
    ]
    if not high:
        return []
    average_benefit = sum(op.benefit for op in high) / len(high)
    first = high[0]
    noun = "Opportunity" if len(high) == 1 else "Opportunities"
    return [
        ctx.insight(
            "productivity",
            "refactoring",
            title=f"{len(high)} High-Value Refactoring {noun}",
            description=f"Refactoring opportunities with average benefit score of {average_benefit:.0f}%. "
            f"{first.description}",
            priority="medium",
            impact=average_benefit,
            confidence=0.82,
            recommendations=[
                f"Start with {first.type} refactoring at {first.location}",
                "Allocate time for systematic technical improvement",
            ],
            supporting_data={"opportunities": [op.to_dict() for op in high]},
        )
    ]


# ── Security ──────────────────────────────────────────────────────────


def security_risk(ctx: GenerationContext) -> list[GeneratedInsight]:
    assessment = ctx.code.assess_security_risks(ctx.workspace_id)
    if assessment.risk_level not in ("critical", "high"):
        return []
    return [
        ctx.insight(
            "security",
            "risk",
            title=f"{assessment.risk_level.upper()} Security Risk Detected",
            description=f"Security vulnerabilities found: {', '.join(assessment.vulnerability_types)}",
            priority=assessment.risk_level,
            impact=95,
            confidence=0.90,
            recommendations=assessment.recommendations,
            supporting_data={"security": assessment.to_dict()},
        )
    ]


# Collaboration has no rules yet; team metrics are not collected.
GENERATORS: dict[str, tuple[Generator, ...]] = {
    "performance": (cognitive_degradation, performance_bottlenecks),
    "quality": (technical_debt,),
    "productivity": (refactoring_opportunities,),
    "security": (security_risk,),
    "collaboration": (),
}
