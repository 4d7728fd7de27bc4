"""CodeAnalyticsEngine: code evolution, debt, architecture and findings."""

import time
from typing import Callable, Optional, Union

from ..config import AnalyticsConfig
from ..exceptions import CollaboratorUnavailableError, InvalidInputError
from ..logging_config import get_logger
from ..math import Statistics, clamp
from ..models import TimeRange, TrendPoint
from ..storage.backend import KeyValueStore, MemoryStore
from ..validation import validate_identifier, validate_time_range
from . import architecture, debt, findings, scoring
from .history import DebtHistory, EvolutionHistory
from .models import (
    ARCHITECTURE_ASPECTS,
    DEBT_CATEGORIES,
    QUALITY_ASPECTS,
    ArchitectureQualityMetrics,
    BugPrediction,
    CodeEvolutionSnapshot,
    CodeQualityBreakdown,
    DebtIssue,
    DeveloperProductivityMetrics,
    PerformanceBottleneckPrediction,
    RefactoringOpportunity,
    SecurityRiskAssessment,
    TechnicalDebtAnalysis,
)
from .protocols import CodeSource

logger = get_logger(__name__)

TREND_METRICS: tuple[str, ...] = (
    "lines_added",
    "lines_removed",
    "lines_modified",
    "files_changed",
    "complexity_delta",
    "code_quality_score",
)


class CodeAnalyticsEngine:
    """Derives code-level analytics from a :class:`CodeSource`.

    Args:
        source: Code-source collaborator
        config: Analytics configuration (defaults if omitted)
        store: Storage collaborator for evolution and debt histories
        clock: Returns the current unix time in seconds
    """

    def __init__(
        self,
        source: CodeSource,
        config: Optional[AnalyticsConfig] = None,
        store: Optional[KeyValueStore] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.source = source
        self.config = config or AnalyticsConfig()
        store = store if store is not None else MemoryStore()
        self._clock = clock
        self._evolution = EvolutionHistory(store, self.config.evolution_retention_seconds)
        self._debt_history = DebtHistory(store, self.config.debt_history_size)

    # ── Evolution ─────────────────────────────────────────────────

    def track_code_evolution(self, workspace_id: str) -> list[CodeEvolutionSnapshot]:
        """Capture a snapshot, append it to the workspace history and prune by age.

        Raises:
            InvalidInputError: Malformed workspace id
            CollaboratorUnavailableError: The change summary could not be captured
        """
        validate_identifier(workspace_id, "workspace_id")

        changes = self.source.capture_changes(workspace_id)
        try:
            quality: Optional[float] = self.get_code_quality_score(workspace_id)
        except CollaboratorUnavailableError as e:
            logger.warning("Quality score unavailable for %s snapshot: %s", workspace_id, e)
            quality = None

        now = self._clock()
        snapshot = CodeEvolutionSnapshot(
            timestamp=now,
            lines_added=changes.lines_added,
            lines_removed=changes.lines_removed,
            lines_modified=changes.lines_modified,
            files_changed=changes.files_changed,
            complexity_delta=changes.complexity_delta,
            code_quality_score=quality,
        )
        return self._evolution.append(workspace_id, snapshot, now)

    def get_evolution_history(self, workspace_id: str) -> list[CodeEvolutionSnapshot]:
        validate_identifier(workspace_id, "workspace_id")
        return self._evolution.get(workspace_id, self._clock())

    # ── Technical debt ────────────────────────────────────────────

    def analyze_technical_debt(self, workspace_id: str) -> TechnicalDebtAnalysis:
        """Run the five category analyzers and aggregate their hour estimates.

        A category whose analyzer is unavailable is left out of the total and
        listed in ``missing_categories`` and in the recommendations.
        """
        validate_identifier(workspace_id, "workspace_id")

        debt_by_category: dict[str, float] = {}
        critical_issues: list[DebtIssue] = []
        missing: list[str] = []

        for category in DEBT_CATEGORIES:
            try:
                issues = self.source.debt_issues(workspace_id, category)
            except CollaboratorUnavailableError as e:
                logger.warning("Debt analyzer '%s' unavailable for %s: %s", category, workspace_id, e)
                missing.append(category)
                continue
            debt_by_category[category] = debt.debt_hours(issues)
            critical_issues.extend(i for i in issues if i.severity == "critical")

        total = float(sum(debt_by_category.values()))
        previous = self._debt_history.totals(workspace_id)
        trend = debt.classify_trend(
            total,
            previous,
            self.config.debt_baseline_window,
            self.config.thresholds.debt_trend_tolerance,
        )
        # A partial total would skew the baseline.
        if not missing:
            self._debt_history.record(workspace_id, total, self._clock())

        recommendations = debt.recommend(debt_by_category, critical_issues, missing, self.config.thresholds)

        logger.debug("Debt for %s: %.1fh (%s), %d critical", workspace_id, total, trend, len(critical_issues))
        return TechnicalDebtAnalysis(
            total_debt=total,
            debt_by_category=debt_by_category,
            critical_issues=critical_issues,
            recommendations=recommendations,
            trend=trend,  # type: ignore[arg-type]
            missing_categories=missing,
        )

    # ── Architecture ──────────────────────────────────────────────

    def assess_architecture_quality(self, workspace_id: str) -> ArchitectureQualityMetrics:
        validate_identifier(workspace_id, "workspace_id")

        scores: dict[str, float] = {}
        missing: list[str] = []
        for aspect in ARCHITECTURE_ASPECTS:
            try:
                scores[aspect] = clamp(self.source.measure_architecture(workspace_id, aspect), 0.0, 100.0)
            except CollaboratorUnavailableError as e:
                logger.warning("Architecture aspect '%s' unavailable for %s: %s", aspect, workspace_id, e)
                missing.append(aspect)

        thresholds = self.config.thresholds
        weak_points, strengths = architecture.classify(
            scores, thresholds.weak_point_score, thresholds.strength_score
        )
        weak_points.extend(f"{aspect.capitalize()} could not be measured" for aspect in missing)

        return ArchitectureQualityMetrics(
            modularity=scores.get("modularity"),
            cohesion=scores.get("cohesion"),
            coupling=scores.get("coupling"),
            maintainability=scores.get("maintainability"),
            testability=scores.get("testability"),
            overall_score=architecture.overall_score(scores),
            weak_points=weak_points,
            strengths=strengths,
            missing_aspects=missing,
        )

    # ── Productivity ──────────────────────────────────────────────

    def analyze_developer_productivity(self, user_id: str, period: str) -> DeveloperProductivityMetrics:
        validate_identifier(user_id, "user_id")
        validate_identifier(period, "period")

        activity = self.source.developer_activity(user_id, period)
        return DeveloperProductivityMetrics(
            user_id=user_id,
            period=period,
            commits_count=activity.commits_count,
            lines_written=activity.lines_written,
            features_completed=activity.features_completed,
            bugs_fixed=activity.bugs_fixed,
            code_reviews_completed=activity.code_reviews_completed,
            average_cycle_time=activity.average_cycle_time,
            focus_time_percentage=activity.focus_time_percentage,
            productivity_score=scoring.productivity_score(activity),
        )

    # ── Findings ──────────────────────────────────────────────────

    def predict_bugs(self, workspace_id: str) -> list[BugPrediction]:
        validate_identifier(workspace_id, "workspace_id")
        return findings.predict_bugs(
            self.source.file_signals(workspace_id), self.config.thresholds.min_bug_probability
        )

    def identify_refactoring_opportunities(self, workspace_id: str) -> list[RefactoringOpportunity]:
        validate_identifier(workspace_id, "workspace_id")
        return findings.find_refactorings(self.source.file_signals(workspace_id))

    def predict_performance_bottlenecks(self, workspace_id: str) -> list[PerformanceBottleneckPrediction]:
        validate_identifier(workspace_id, "workspace_id")
        return findings.classify_bottlenecks(self.source.performance_signals(workspace_id))

    def assess_security_risks(self, workspace_id: str) -> SecurityRiskAssessment:
        validate_identifier(workspace_id, "workspace_id")
        return findings.assess_security(self.source.security_findings(workspace_id))

    # ── Quality score ─────────────────────────────────────────────

    def get_code_quality_breakdown(self, path: str) -> CodeQualityBreakdown:
        """Sub-scores, missing aspects and composite score for a file or directory.

        Raises:
            CollaboratorUnavailableError: If no sub-score could be measured
        """
        validate_identifier(path, "path")

        sub_scores: dict[str, float] = {}
        missing: list[str] = []
        last_error: Optional[CollaboratorUnavailableError] = None
        for aspect in QUALITY_ASPECTS:
            try:
                sub_scores[aspect] = clamp(self.source.measure_quality(path, aspect), 0.0, 100.0)
            except CollaboratorUnavailableError as e:
                logger.warning("Quality aspect '%s' unavailable for %s: %s", aspect, path, e)
                missing.append(aspect)
                last_error = e

        if not sub_scores and last_error is not None:
            raise last_error

        return CodeQualityBreakdown(
            path=path,
            sub_scores=sub_scores,
            missing_aspects=missing,
            score=scoring.composite_quality(sub_scores),
        )

    def get_code_quality_score(self, path: str) -> float:
        """Composite quality score for ``path``.

        With all five aspects measured this is the exact weighted sum. When
        some aspects are unavailable the remaining weights are renormalized
        and the gap is not visible here; use :meth:`get_code_quality_breakdown`
        to see ``missing_aspects``.

        Raises:
            CollaboratorUnavailableError: No aspect could be measured
        """
        return self.get_code_quality_breakdown(path).score

    # ── Trends ────────────────────────────────────────────────────

    def get_metric_trend(
        self,
        metric: str,
        time_range: Union[TimeRange, tuple],
        workspace_id: Optional[str] = None,
    ) -> list[TrendPoint]:
        """Resample an evolution metric onto evenly spaced points across ``time_range``.

        Observations come from ``workspace_id`` or, if omitted, from every
        tracked workspace. Returns an empty list when nothing was observed.
        """
        if metric not in TREND_METRICS:
            raise InvalidInputError("metric", metric, f"expected one of {', '.join(TREND_METRICS)}")
        time_range = validate_time_range(time_range)
        if workspace_id is not None:
            validate_identifier(workspace_id, "workspace_id")
            workspaces = [workspace_id]
        else:
            workspaces = self._evolution.workspaces()

        now = self._clock()
        observed = [
            (s.timestamp, float(getattr(s, metric)))
            for ws in workspaces
            for s in self._evolution.get(ws, now)
            if getattr(s, metric) is not None
        ]
        points = Statistics.resample(
            [t for t, _ in observed],
            [v for _, v in observed],
            time_range.start,
            time_range.end,
            self.config.trend_points,
        )
        return [TrendPoint(t, v) for t, v in points]
