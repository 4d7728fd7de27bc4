"""Data models for code analytics."""

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Literal, Optional

from ..models import Severity

DebtCategory = Literal["code-smell", "duplication", "complexity", "deprecated", "security"]
DebtTrend = Literal["increasing", "decreasing", "stable"]
RefactoringType = Literal["extract-method", "rename", "move", "simplify", "optimize"]
RefactoringPriority = Literal["high", "medium", "low"]
BottleneckType = Literal["cpu", "memory", "io", "network"]

DEBT_CATEGORIES: tuple[str, ...] = ("code-smell", "duplication", "complexity", "deprecated", "security")

ARCHITECTURE_ASPECTS: tuple[str, ...] = (
    "modularity",
    "cohesion",
    "coupling",
    "maintainability",
    "testability",
)

QUALITY_ASPECTS: tuple[str, ...] = ("complexity", "duplication", "coverage", "documentation", "style")


# ── Collaborator inputs ───────────────────────────────────────────────


@dataclass(frozen=True)
class ChangeSummary:
    """Raw change counts for one collection tick, as reported by the code source."""

    lines_added: int = 0
    lines_removed: int = 0
    lines_modified: int = 0
    files_changed: int = 0
    complexity_delta: float = 0.0


@dataclass(frozen=True)
class FileSignals:
    """Per-file static and historical signals. None means "not measured"."""

    path: str
    complexity: Optional[float] = None  # cyclomatic complexity of the worst function
    coverage: Optional[float] = None  # test coverage, 0-100
    recent_changes: Optional[int] = None  # commits touching the file in the recent window
    max_nesting: Optional[int] = None
    longest_function: Optional[int] = None  # lines
    duplication: Optional[float] = None  # duplicated lines, 0-100 %


@dataclass(frozen=True)
class PerformanceSignal:
    """A potential hotspot reported by the code source."""

    location: str
    type: BottleneckType
    description: str
    estimated_impact: float  # percentage slowdown


@dataclass(frozen=True)
class SecurityFinding:
    """A vulnerability reported by the code source."""

    location: str
    vulnerability_type: str
    cvss_score: float
    description: str = ""


@dataclass(frozen=True)
class DeveloperActivity:
    """Raw activity counts for a developer over a period."""

    commits_count: int = 0
    lines_written: int = 0
    features_completed: int = 0
    bugs_fixed: int = 0
    code_reviews_completed: int = 0
    average_cycle_time: float = 0.0  # hours
    focus_time_percentage: float = 0.0  # 0-100


# ── Engine outputs ────────────────────────────────────────────────────


@dataclass(frozen=True)
class CodeEvolutionSnapshot:
    timestamp: float
    lines_added: int
    lines_removed: int
    lines_modified: int
    files_changed: int
    complexity_delta: float
    code_quality_score: Optional[float]  # None when the quality source was unavailable

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "CodeEvolutionSnapshot":
        return cls(
            timestamp=float(d["timestamp"]),
            lines_added=int(d.get("lines_added", 0)),
            lines_removed=int(d.get("lines_removed", 0)),
            lines_modified=int(d.get("lines_modified", 0)),
            files_changed=int(d.get("files_changed", 0)),
            complexity_delta=float(d.get("complexity_delta", 0.0)),
            code_quality_score=d.get("code_quality_score"),
        )


@dataclass(frozen=True)
class DebtIssue:
    id: str
    category: DebtCategory
    severity: Severity
    location: str
    description: str
    estimated_effort: float  # hours
    impact: float  # 0-100

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "DebtIssue":
        return cls(
            id=str(d["id"]),
            category=d["category"],
            severity=d["severity"],
            location=str(d.get("location", "")),
            description=str(d.get("description", "")),
            estimated_effort=float(d.get("estimated_effort", 0.0)),
            impact=float(d.get("impact", 0.0)),
        )


@dataclass
class TechnicalDebtAnalysis:
    total_debt: float  # hours
    debt_by_category: Dict[str, float]
    critical_issues: List[DebtIssue]
    recommendations: List[str]
    trend: DebtTrend
    missing_categories: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total_debt": self.total_debt,
            "debt_by_category": dict(self.debt_by_category),
            "critical_issues": [i.to_dict() for i in self.critical_issues],
            "recommendations": list(self.recommendations),
            "trend": self.trend,
            "missing_categories": list(self.missing_categories),
        }


@dataclass
class ArchitectureQualityMetrics:
    modularity: Optional[float]
    cohesion: Optional[float]
    coupling: Optional[float]  # lower is better
    maintainability: Optional[float]
    testability: Optional[float]
    overall_score: float
    weak_points: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    missing_aspects: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DeveloperProductivityMetrics:
    user_id: str
    period: str
    commits_count: int
    lines_written: int
    features_completed: int
    bugs_fixed: int
    code_reviews_completed: int
    average_cycle_time: float
    focus_time_percentage: float
    productivity_score: float  # 0-100

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class BugPrediction:
    file_or_module: str
    probability: float  # 0-1
    confidence: float  # 0-1
    severity: Severity
    risk_factors: List[str]
    recommendations: List[str]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class RefactoringOpportunity:
    id: str
    type: RefactoringType
    location: str
    description: str
    benefit: float  # 0-100
    effort: float  # hours
    priority: RefactoringPriority
    confidence: float = 1.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class PerformanceBottleneckPrediction:
    location: str
    type: BottleneckType
    severity: Severity
    description: str
    estimated_impact: float  # percentage slowdown
    confidence: float
    recommendations: List[str]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SecurityRisk:
    location: str
    vulnerability_type: str
    severity: Severity
    cvss_score: float
    description: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SecurityRiskAssessment:
    risk_level: Severity
    vulnerability_types: List[str]
    affected_areas: List[str]
    recommendations: List[str]
    cvss_score: Optional[float] = None
    findings: List[SecurityRisk] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class CodeQualityBreakdown:
    path: str
    sub_scores: Dict[str, float]
    missing_aspects: List[str]
    score: float

    def to_dict(self) -> dict:
        return asdict(self)
