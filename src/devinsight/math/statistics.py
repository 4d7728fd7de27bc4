"""Descriptive statistics and time-series resampling."""

from typing import Mapping, Optional, Sequence

import numpy as np


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into [low, high]."""
    return max(low, min(high, value))


class Statistics:
    """Statistical helpers used by the scoring code."""

    @staticmethod
    def mean(values: Sequence[float]) -> Optional[float]:
        """Unweighted arithmetic mean, or None for an empty sequence."""
        if not values:
            return None
        return float(np.mean(np.asarray(values, dtype=float)))

    @staticmethod
    def weighted_sum(values: Mapping[str, float], weights: Mapping[str, float]) -> float:
        """
        Weighted sum over the keys of ``weights``.

        Computed term by term in key order so the result equals the literal
        expression w1*v1 + w2*v2 + ... up to floating-point rounding.
        """
        total = 0.0
        for key, weight in weights.items():
            total += values[key] * weight
        return total

    @staticmethod
    def resample(
        timestamps: Sequence[float],
        values: Sequence[float],
        start: float,
        end: float,
        points: int,
    ) -> list[tuple[float, float]]:
        """
        Resample an irregular series onto ``points`` evenly spaced timestamps.

        Linear interpolation between observations; outside the observed span
        the nearest observation is held constant.

        Args:
            timestamps: Observation times (any order)
            values: Observed values, parallel to timestamps
            start: First output timestamp
            end: Last output timestamp
            points: Number of output points (>= 2)

        Returns:
            List of (timestamp, value) pairs; empty if there are no observations.
        """
        if not timestamps:
            return []

        ts = np.asarray(timestamps, dtype=float)
        vs = np.asarray(values, dtype=float)
        order = np.argsort(ts, kind="stable")
        ts, vs = ts[order], vs[order]

        grid = np.linspace(start, end, points)
        interpolated = np.interp(grid, ts, vs)
        return [(float(t), float(v)) for t, v in zip(grid, interpolated)]
