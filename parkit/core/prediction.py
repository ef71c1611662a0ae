"""Short-term availability forecasting from occupancy snapshots.

The model extrapolates the recency-weighted rate of change of free spots,
adds a second-order term from the most recent change samples, and speeds the
trend up during commute hours:

    predicted = free + v * t * peak + 0.5 * a * t**2

where `v` is the weighted change per 10 minutes, `a` the discrete acceleration
of that change and `t` the horizon measured in 10-minute intervals.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence, Tuple

from parkit.core.exceptions import InvalidSnapshotHistoryError
from parkit.schemas.occupancy import Confidence, OccupancySnapshot, OccupancyStats, PredictionResult

logger = logging.getLogger(__name__)

MIN_SNAPSHOTS = 3
INSUFFICIENT_DATA_REASONING = "Insufficient historical data for accurate prediction"

# Inclusive hour ranges
PEAK_HOURS = ((8, 10), (17, 19))
PEAK_MULTIPLIER = 1.3

# Confidence score components
SATURATION_SAMPLES = 30
VOLUME_WEIGHT = 0.4
STABILITY_WEIGHT = 0.4
ACCELERATION_BONUS = 0.2
HIGH_CONFIDENCE_SCORE = 0.7
MEDIUM_CONFIDENCE_SCORE = 0.4

TREND_THRESHOLD = 0.5
ACCELERATION_NOTE_THRESHOLD = 0.5


@dataclass(frozen=True)
class TrendAnalysis:
    """Intermediate quantities of the forecasting model."""

    sample_count: int
    changes: Tuple[float, ...]
    weighted_avg_change: float
    acceleration: float
    variance: float
    confidence_score: float

    @property
    def confidence(self) -> Confidence:
        return confidence_level(self.confidence_score)

    @property
    def trend(self) -> str:
        if self.weighted_avg_change > TREND_THRESHOLD:
            return "increasing"
        if self.weighted_avg_change < -TREND_THRESHOLD:
            return "decreasing"
        return "stable"


def is_peak_hour(moment: datetime) -> bool:
    """Check whether a moment falls in a commute window."""
    return any(start <= moment.hour <= end for start, end in PEAK_HOURS)


def confidence_level(score: float) -> Confidence:
    if score > HIGH_CONFIDENCE_SCORE:
        return Confidence.HIGH
    if score > MEDIUM_CONFIDENCE_SCORE:
        return Confidence.MEDIUM
    return Confidence.LOW


def classify_congestion(occupancy_rate: float) -> str:
    if occupancy_rate > 0.8:
        return "High"
    if occupancy_rate > 0.5:
        return "Medium"
    return "Low"


def analyze_trend(snapshots: Sequence[OccupancySnapshot]) -> TrendAnalysis:
    """
    Derive change rate, acceleration and confidence from a snapshot history.

    Args:
        snapshots: Chronological history with at least two entries

    Returns:
        TrendAnalysis for the history

    Raises:
        InvalidSnapshotHistoryError: if timestamps do not strictly increase
    """
    count = len(snapshots)
    if count < 2:
        raise InvalidSnapshotHistoryError("Trend analysis needs at least two snapshots")

    changes = []
    weights = []
    for i in range(1, count):
        previous, current = snapshots[i - 1], snapshots[i]
        minutes = (current.timestamp - previous.timestamp).total_seconds() / 60
        if minutes <= 0:
            raise InvalidSnapshotHistoryError(
                f"Snapshot {i} at {current.timestamp.isoformat()} does not follow "
                f"{previous.timestamp.isoformat()}"
            )
        changes.append((current.free - previous.free) / minutes * 10)
        # Later samples weigh exponentially more
        weights.append(math.exp(i / count))

    total_weight = sum(weights)
    weighted_avg_change = sum(c * w for c, w in zip(changes, weights)) / total_weight

    acceleration = 0.0
    if len(changes) >= 3:
        first, _, last = changes[-3:]
        acceleration = (last - first) / 2

    variance = sum((c - weighted_avg_change) ** 2 for c in changes) / len(changes)

    confidence_score = (
        min(1.0, count / SATURATION_SAMPLES) * VOLUME_WEIGHT
        + (1 / (1 + variance)) * STABILITY_WEIGHT
        + (ACCELERATION_BONUS if abs(acceleration) < 1 else 0.0)
    )

    return TrendAnalysis(
        sample_count=count,
        changes=tuple(changes),
        weighted_avg_change=weighted_avg_change,
        acceleration=acceleration,
        variance=variance,
        confidence_score=confidence_score,
    )


def _describe(
    analysis: TrendAnalysis,
    peak: bool,
    stats: Optional[OccupancyStats],
) -> str:
    acceleration_note = ""
    if abs(analysis.acceleration) > ACCELERATION_NOTE_THRESHOLD:
        acceleration_note = ", accelerating" if analysis.acceleration > 0 else ", decelerating"

    time_note = " (peak hours)" if peak else ""

    congestion_note = ""
    if stats is not None:
        rate = stats.occupancy_rate
        congestion_note = (
            f" | {classify_congestion(rate)} congestion detected ({rate * 100:.0f}% occupied)"
        )

    return (
        f"Analyzed {analysis.sample_count} data points: availability {analysis.trend} "
        f"at {abs(analysis.weighted_avg_change):.2f} spots/10min"
        f"{acceleration_note}{time_note}{congestion_note}. "
        f"Confidence: {analysis.confidence_score * 100:.0f}%"
    )


def predict(
    snapshots: Sequence[OccupancySnapshot],
    minutes_ahead: int = 30,
    stats: Optional[OccupancyStats] = None,
    now: Optional[datetime] = None,
) -> PredictionResult:
    """
    Forecast the number of free spots `minutes_ahead` minutes from now.

    Args:
        snapshots: Chronological occupancy history
        minutes_ahead: Forecast horizon in minutes
        stats: Current statistics; only used for the congestion note
        now: Moment used for the peak-hour check, defaults to local time

    Returns:
        PredictionResult with the free-spot count clamped to [0, total]
    """
    if len(snapshots) < MIN_SNAPSHOTS:
        return PredictionResult(
            predicted_free=snapshots[-1].free if snapshots else 0,
            confidence=Confidence.LOW,
            reasoning=INSUFFICIENT_DATA_REASONING,
        )

    analysis = analyze_trend(snapshots)
    now = now or datetime.now()
    peak = is_peak_hour(now)
    time_multiplier = PEAK_MULTIPLIER if peak else 1.0

    latest = snapshots[-1]
    intervals = minutes_ahead / 10
    trend_prediction = analysis.weighted_avg_change * intervals * time_multiplier
    acceleration_effect = 0.5 * analysis.acceleration * intervals * intervals
    raw_prediction = latest.free + trend_prediction + acceleration_effect

    # Round half up
    predicted_free = max(0, min(latest.total, math.floor(raw_prediction + 0.5)))

    logger.debug(
        f"Forecast {minutes_ahead}min ahead: raw={raw_prediction:.2f}, "
        f"predicted={predicted_free}, score={analysis.confidence_score:.2f}"
    )

    return PredictionResult(
        predicted_free=predicted_free,
        confidence=analysis.confidence,
        reasoning=_describe(analysis, peak, stats),
    )
