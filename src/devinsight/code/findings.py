"""Rule-based code findings: bugs, refactorings, bottlenecks, security risks.

All rules are explicit thresholds over collaborator signals. Every finder
returns its findings in a reproducible order: severity (or priority) first,
then the finding's magnitude descending, then location ascending.
"""

from typing import Sequence

from ..math import clamp
from ..models import SEVERITY_RANK
from .models import (
    BugPrediction,
    FileSignals,
    PerformanceBottleneckPrediction,
    PerformanceSignal,
    RefactoringOpportunity,
    SecurityFinding,
    SecurityRisk,
    SecurityRiskAssessment,
)

# ── Bug prediction ────────────────────────────────────────────────────

# (signal, weight, fires, risk factor, recommendation)
_BUG_RULES = (
    (
        "complexity",
        0.30,
        lambda v: v > 20,
        lambda v: f"High cyclomatic complexity ({v:g})",
        "Break down complex functions into smaller units",
    ),
    (
        "coverage",
        0.25,
        lambda v: v < 50,
        lambda v: f"Low test coverage ({v:g}%)",
        "Increase test coverage to at least 70%",
    ),
    (
        "recent_changes",
        0.25,
        lambda v: v > 10,
        lambda v: f"Frequent recent changes ({v} commits)",
        "Review recent changes and add regression tests",
    ),
    (
        "max_nesting",
        0.20,
        lambda v: v > 4,
        lambda v: f"Deeply nested control flow (depth {v})",
        "Flatten nested control flow with early returns",
    ),
)


def _bug_severity(probability: float) -> str:
    if probability >= 0.75:
        return "critical"
    if probability >= 0.5:
        return "high"
    if probability >= 0.3:
        return "medium"
    return "low"


def predict_bugs(signals: Sequence[FileSignals], min_probability: float = 0.3) -> list[BugPrediction]:
    """Score each file by the weights of the bug-risk rules it trips.

    Confidence grows with the number of signals that were actually measured.
    """
    predictions: list[BugPrediction] = []
    for fs in signals:
        probability = 0.0
        known = 0
        factors: list[str] = []
        recommendations: list[str] = []
        for name, weight, fires, describe, advice in _BUG_RULES:
            value = getattr(fs, name)
            if value is None:
                continue
            known += 1
            if fires(value):
                probability += weight
                factors.append(describe(value))
                recommendations.append(advice)

        probability = clamp(probability, 0.0, 1.0)
        if not factors or probability < min_probability:
            continue

        predictions.append(
            BugPrediction(
                file_or_module=fs.path,
                probability=probability,
                confidence=0.5 + 0.5 * known / len(_BUG_RULES),
                severity=_bug_severity(probability),  # type: ignore[arg-type]
                risk_factors=factors,
                recommendations=recommendations,
            )
        )

    predictions.sort(key=lambda p: (SEVERITY_RANK[p.severity], -p.probability, p.file_or_module))
    return predictions


# ── Refactoring opportunities ─────────────────────────────────────────


def _refactor_priority(benefit: float) -> str:
    if benefit >= 80:
        return "high"
    if benefit >= 60:
        return "medium"
    return "low"


def find_refactorings(signals: Sequence[FileSignals]) -> list[RefactoringOpportunity]:
    """Long functions, duplicated code and deep nesting become opportunities.

    Ids (``refactor-001`` ...) are assigned after ordering so they are stable
    for identical input.
    """
    found: list[tuple[str, str, str, float, float, float]] = []
    for fs in signals:
        if fs.longest_function is not None and fs.longest_function > 50:
            found.append(
                (
                    "extract-method",
                    fs.path,
                    f"Long function ({fs.longest_function} lines) with multiple responsibilities"
                    " - extract cohesive blocks into helpers",
                    min(100.0, 50 + (fs.longest_function - 50) / 2),
                    max(1.0, round(fs.longest_function / 40, 1)),
                    0.8,
                )
            )
        if fs.duplication is not None and fs.duplication > 10:
            found.append(
                (
                    "extract-method",
                    fs.path,
                    f"{fs.duplication:g}% duplicated code - extract shared logic",
                    min(100.0, 40 + 2 * fs.duplication),
                    max(1.0, round(fs.duplication / 5, 1)),
                    0.7,
                )
            )
        if fs.max_nesting is not None and fs.max_nesting > 4:
            found.append(
                (
                    "simplify",
                    fs.path,
                    f"Nested conditionals (depth {fs.max_nesting}) - simplify with guard clauses or a strategy",
                    min(100.0, 40 + 10 * (fs.max_nesting - 4)),
                    float(fs.max_nesting - 3),
                    0.8,
                )
            )

    found.sort(key=lambda f: (SEVERITY_RANK[_refactor_priority(f[3])], -f[3], f[1], f[0]))

    return [
        RefactoringOpportunity(
            id=f"refactor-{i:03d}",
            type=kind,  # type: ignore[arg-type]
            location=location,
            description=description,
            benefit=benefit,
            effort=effort,
            priority=_refactor_priority(benefit),  # type: ignore[arg-type]
            confidence=confidence,
        )
        for i, (kind, location, description, benefit, effort, confidence) in enumerate(found, start=1)
    ]


# ── Performance bottlenecks ───────────────────────────────────────────

BOTTLENECK_RECOMMENDATIONS = {
    "cpu": [
        "Replace nested iteration with hash-based lookups",
        "Process large inputs in batches",
        "Cache results of repeated computations",
    ],
    "memory": [
        "Stream data instead of loading it fully into memory",
        "Release references to large objects promptly",
    ],
    "io": [
        "Batch or buffer I/O operations",
        "Move blocking I/O off the hot path",
    ],
    "network": [
        "Reduce round trips by batching requests",
        "Cache remote responses where freshness allows",
    ],
}


def _impact_severity(impact: float) -> str:
    if impact >= 60:
        return "critical"
    if impact >= 40:
        return "high"
    if impact >= 20:
        return "medium"
    return "low"


def classify_bottlenecks(signals: Sequence[PerformanceSignal]) -> list[PerformanceBottleneckPrediction]:
    predictions = []
    for sig in signals:
        impact = clamp(sig.estimated_impact, 0.0, 100.0)
        predictions.append(
            PerformanceBottleneckPrediction(
                location=sig.location,
                type=sig.type,
                severity=_impact_severity(impact),  # type: ignore[arg-type]
                description=sig.description,
                estimated_impact=impact,
                confidence=0.8,
                recommendations=list(BOTTLENECK_RECOMMENDATIONS.get(sig.type, [])),
            )
        )
    predictions.sort(key=lambda p: (SEVERITY_RANK[p.severity], -p.estimated_impact, p.location))
    return predictions


# ── Security risks ────────────────────────────────────────────────────

SECURITY_RECOMMENDATIONS = {
    "sql-injection": "Use parameterized queries or an ORM for database access",
    "xss": "Escape and sanitize all user-controlled output",
    "input-validation": "Implement input validation and sanitization on every entry point",
    "vulnerable-dependency": "Update dependencies to versions without known vulnerabilities",
    "hardcoded-secret": "Move credentials out of source code into a secret store",
    "weak-crypto": "Replace deprecated cryptographic algorithms",
}

CI_RECOMMENDATION = "Add security linting rules to the CI pipeline"


def _cvss_severity(cvss: float) -> str:
    if cvss >= 9.0:
        return "critical"
    if cvss >= 7.0:
        return "high"
    if cvss >= 4.0:
        return "medium"
    return "low"


def assess_security(findings: Sequence[SecurityFinding]) -> SecurityRiskAssessment:
    """Aggregate findings; the overall risk level is that of the worst finding."""
    risks = [
        SecurityRisk(
            location=f.location,
            vulnerability_type=f.vulnerability_type,
            severity=_cvss_severity(clamp(f.cvss_score, 0.0, 10.0)),  # type: ignore[arg-type]
            cvss_score=clamp(f.cvss_score, 0.0, 10.0),
            description=f.description,
        )
        for f in findings
    ]
    risks.sort(key=lambda r: (SEVERITY_RANK[r.severity], -r.cvss_score, r.location))

    if not risks:
        return SecurityRiskAssessment(
            risk_level="low",
            vulnerability_types=[],
            affected_areas=[],
            recommendations=[],
            cvss_score=None,
            findings=[],
        )

    vulnerability_types = list(dict.fromkeys(r.vulnerability_type for r in risks))
    recommendations = [
        SECURITY_RECOMMENDATIONS.get(v, f"Review and remediate {v} findings") for v in vulnerability_types
    ]
    recommendations.append(CI_RECOMMENDATION)

    return SecurityRiskAssessment(
        risk_level=risks[0].severity,
        vulnerability_types=vulnerability_types,
        affected_areas=list(dict.fromkeys(r.location for r in risks)),
        recommendations=list(dict.fromkeys(recommendations)),
        cvss_score=max(r.cvss_score for r in risks),
        findings=risks,
    )
