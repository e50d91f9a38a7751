"""
Spend Optimization Engine.

Infers the shape of a campaign's spend -> leads response curve from its daily
stats history, decides whether the data supports a confident recommendation,
and if so computes the daily spend with the best marginal lead yield.

Algorithm Overview:
    1. Data selection: keep days with ad spend > 0 and leads >= 0, at most the
       60 most recent. Fewer than 5 days -> 'gathering'.
    2. Variation gate: if spend moved by less than max(15% of the minimum,
       $50) the curve cannot be fitted reliably -> benchmark analysis tagged
       'insufficient_variation'.
    3. Curve fitting: logarithmic, quadratic and linear least-squares fits,
       each scored by R².
    4. Model selection: highest R² wins (ties go to the earlier fit). R² below
       0.2 -> benchmark analysis tagged 'basic'; 0.2-0.4 -> 'low_confidence';
       0.4 and above -> 'advanced'.
    5. Optimization: vertex of a concave quadratic clamped to the observed
       spend range, otherwise a 21-point scan of marginal leads per dollar.

Key Outputs (OptimizationResult):
    - optimalDailySpend: recommended daily spend in whole dollars
    - currentEfficiency: predicted leads at current spend vs at optimum (0-100)
    - confidenceScore: 0-100, derived from R² or fixed for benchmark paths
    - marginalLeadsPerDollar, projectedLeadIncrease
    - analysisType: the path that produced the numbers

The engine is a pure function of its input: no I/O, no shared state. Every
call recomputes from scratch, so it is safe to call concurrently.

Dependencies:
    - numpy: vectorised sums for the regressions
    - Pydantic models from campaign_backend/models/schemas.py

Usage:
    from campaign_backend.services.spend_optimization import compute_optimal_spend

    result = compute_optimal_spend(history)
    if result is not None and result.analysisType == AnalysisType.ADVANCED:
        print(result.optimalDailySpend)
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from campaign_backend.models.enums import AnalysisType, RegressionKind
from campaign_backend.models.schemas import HistoryPoint, OptimizationResult
from campaign_backend.services.recommendation_text import (
    basic_message,
    format_spend_delta,
    gathering_message,
    insufficient_variation_message,
    round_half_up,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Most recent spend days considered. Product-tuning parameter, overridable
# per call through compute_optimal_spend(history_window=...).
HISTORY_WINDOW: int = 60

# Below this many usable days any regression is statistically meaningless
MIN_DATA_POINTS: int = 5

# Variation gate: spend must move by at least the larger of these
MIN_RELATIVE_SPEND_VARIATION: float = 0.15
MIN_ABSOLUTE_SPEND_VARIATION: float = 50.0

# Quadratic normal equations with |det| below this fall back to linear
DETERMINANT_EPSILON: float = 1e-10

# R² bands for model trust
BASIC_R_SQUARED_CUTOFF: float = 0.2
ADVANCED_R_SQUARED_CUTOFF: float = 0.4

# Equally spaced candidates scanned across the observed spend range
OPTIMIZER_SCAN_POINTS: int = 21

# Forward-difference step as a fraction of spend
MARGINAL_STEP_FRACTION: float = 0.01

# Industry benchmark cost per lead in dollars
BENCHMARK_CPL: float = 125.0

# Confidence scores for paths that do not rely on a fitted curve
LOW_CONFIDENCE_SCORE_CAP: int = 60
INSUFFICIENT_VARIATION_CONFIDENCE: int = 30
BASIC_CONFIDENCE: int = 45

# Spend multipliers suggested by the benchmark analysis
VARIATION_TEST_MULTIPLIER: float = 1.2
REDUCE_SPEND_MULTIPLIER: float = 0.8
INCREASE_SPEND_MULTIPLIER: float = 1.3

# Neutral efficiency when cost per lead cannot be computed
NEUTRAL_EFFICIENCY: float = 50.0


# =============================================================================
# Regression Model
# =============================================================================


@dataclass(frozen=True)
class RegressionModel:
    """
    A fitted spend -> leads response curve.

    Attributes:
        kind: Shape of the curve (logarithmic, quadratic or linear).
        coefficients: (a, b) for logarithmic/linear, (a, b, c) for quadratic,
            highest-order term first.
        r_squared: Goodness of fit in [0, 1].
        predict: Predicted leads for a daily spend, never negative.
    """
    kind: RegressionKind
    coefficients: Tuple[float, ...]
    r_squared: float
    predict: Callable[[float], float]


# =============================================================================
# Data Selection and Variation Gate
# =============================================================================


def select_recent_data(
    history: Sequence[HistoryPoint],
    window: int = HISTORY_WINDOW
) -> List[HistoryPoint]:
    """
    Extract the usable window of history.

    Keeps entries with adSpend > 0 and leads >= 0, then the first `window`
    survivors. Callers are expected to pass history newest first; the order
    is not checked.

    Args:
        history: Daily stats for one campaign.
        window: Maximum number of entries to keep.

    Returns:
        The filtered, truncated list in input order.
    """
    usable = [
        point for point in history
        if point.adSpend is not None and point.adSpend > 0 and point.leads >= 0
    ]
    return usable[:window]


def has_sufficient_variation(spends: Sequence[float]) -> bool:
    """
    Decide whether spend moved enough to justify curve fitting.

    The relative floor protects low-spend campaigns, where $50 is a large
    swing; the absolute floor protects high-spend campaigns, where 15% can
    still be noise.

    Example:
        >>> has_sufficient_variation([100.0, 100.0, 100.0])
        False
        >>> has_sufficient_variation([100.0, 250.0, 400.0])
        True
    """
    if not spends:
        return False

    min_spend = min(spends)
    max_spend = max(spends)
    required = max(
        MIN_RELATIVE_SPEND_VARIATION * min_spend,
        MIN_ABSOLUTE_SPEND_VARIATION
    )
    return (max_spend - min_spend) >= required


# =============================================================================
# Curve Fitting
# =============================================================================


def _points(data: Sequence[HistoryPoint]) -> Tuple[np.ndarray, np.ndarray]:
    spends = np.array([point.adSpend or 0.0 for point in data], dtype=np.float64)
    leads = np.array([point.leads for point in data], dtype=np.float64)
    return spends, leads


def calculate_r_squared(observed: np.ndarray, predicted: np.ndarray) -> float:
    """
    Coefficient of determination against the mean of observed leads.

    A negative value (worse than predicting the mean) is reported as 0.
    Constant observations leave no variance to explain and also score 0.

    Returns:
        R² in [0, 1].
    """
    if observed.size == 0:
        return 0.0

    ss_tot = float(np.sum((observed - observed.mean()) ** 2))
    if ss_tot <= 0.0:
        return 0.0

    ss_res = float(np.sum((observed - predicted) ** 2))
    r_squared = 1.0 - ss_res / ss_tot

    if not math.isfinite(r_squared):
        return 0.0
    return min(1.0, max(0.0, r_squared))


def _least_squares_line(x: np.ndarray, y: np.ndarray) -> Tuple[float, float]:
    """Ordinary least squares slope and intercept; flat line if x is constant."""
    x_mean = float(x.mean())
    y_mean = float(y.mean())

    sxx = float(np.sum((x - x_mean) ** 2))
    if float(np.ptp(x)) == 0.0 or sxx <= 0.0:
        return 0.0, y_mean

    sxy = float(np.sum((x - x_mean) * (y - y_mean)))
    slope = sxy / sxx
    return slope, y_mean - slope * x_mean


def fit_linear_model(data: Sequence[HistoryPoint]) -> RegressionModel:
    """
    Fit leads = a*spend + b by ordinary least squares.

    Args:
        data: At least one history point.

    Returns:
        RegressionModel of kind LINEAR.
    """
    spends, leads = _points(data)
    slope, intercept = _least_squares_line(spends, leads)

    r_squared = calculate_r_squared(leads, slope * spends + intercept)

    def predict(spend: float) -> float:
        return max(0.0, slope * spend + intercept)

    return RegressionModel(
        kind=RegressionKind.LINEAR,
        coefficients=(slope, intercept),
        r_squared=r_squared,
        predict=predict,
    )


def fit_logarithmic_model(data: Sequence[HistoryPoint]) -> RegressionModel:
    """
    Fit leads = a*ln(spend) + b by least squares on the log-transformed spend.

    Captures diminishing returns, the usual real-world shape of spend ->
    leads. Spend must be positive; the data selector guarantees it.

    Returns:
        RegressionModel of kind LOGARITHMIC.
    """
    spends, leads = _points(data)
    log_spends = np.log(spends)
    slope, intercept = _least_squares_line(log_spends, leads)

    r_squared = calculate_r_squared(leads, slope * log_spends + intercept)

    def predict(spend: float) -> float:
        if spend <= 0:
            return 0.0
        return max(0.0, slope * math.log(spend) + intercept)

    return RegressionModel(
        kind=RegressionKind.LOGARITHMIC,
        coefficients=(slope, intercept),
        r_squared=r_squared,
        predict=predict,
    )


def _det3(
    a11: float, a12: float, a13: float,
    a21: float, a22: float, a23: float,
    a31: float, a32: float, a33: float
) -> float:
    return (
        a11 * (a22 * a33 - a23 * a32)
        - a12 * (a21 * a33 - a23 * a31)
        + a13 * (a21 * a32 - a22 * a31)
    )


def fit_quadratic_model(data: Sequence[HistoryPoint]) -> RegressionModel:
    """
    Fit leads = a*spend² + b*spend + c from the 3x3 normal equations.

    The system

        | Σx⁴ Σx³ Σx² | |a|   | Σx²y |
        | Σx³ Σx² Σx  | |b| = | Σxy  |
        | Σx² Σx  n   | |c|   | Σy   |

    is solved by Cramer's rule. When the determinant is numerically zero
    (fewer than three distinct spends, for example) the linear fit is
    returned instead.

    Returns:
        RegressionModel of kind QUADRATIC, or LINEAR on fallback.
    """
    x, y = _points(data)
    n = float(x.size)

    x2 = x * x
    sum_x = float(np.sum(x))
    sum_x2 = float(np.sum(x2))
    sum_x3 = float(np.sum(x2 * x))
    sum_x4 = float(np.sum(x2 * x2))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))
    sum_x2y = float(np.sum(x2 * y))

    determinant = _det3(
        sum_x4, sum_x3, sum_x2,
        sum_x3, sum_x2, sum_x,
        sum_x2, sum_x, n,
    )

    if abs(determinant) < DETERMINANT_EPSILON:
        logger.debug("Quadratic normal equations are degenerate, using linear fit")
        return fit_linear_model(data)

    a = _det3(
        sum_x2y, sum_x3, sum_x2,
        sum_xy, sum_x2, sum_x,
        sum_y, sum_x, n,
    ) / determinant
    b = _det3(
        sum_x4, sum_x2y, sum_x2,
        sum_x3, sum_xy, sum_x,
        sum_x2, sum_y, n,
    ) / determinant
    c = _det3(
        sum_x4, sum_x3, sum_x2y,
        sum_x3, sum_x2, sum_xy,
        sum_x2, sum_x, sum_y,
    ) / determinant

    if not all(math.isfinite(value) for value in (a, b, c)):
        return fit_linear_model(data)

    r_squared = calculate_r_squared(y, a * x2 + b * x + c)

    def predict(spend: float) -> float:
        return max(0.0, a * spend * spend + b * spend + c)

    return RegressionModel(
        kind=RegressionKind.QUADRATIC,
        coefficients=(a, b, c),
        r_squared=r_squared,
        predict=predict,
    )


def fit_models(data: Sequence[HistoryPoint]) -> List[RegressionModel]:
    """Fit every candidate curve, in tie-break order."""
    return [
        fit_logarithmic_model(data),
        fit_quadratic_model(data),
        fit_linear_model(data),
    ]


# =============================================================================
# Model Selection
# =============================================================================


def select_best_model(models: Sequence[RegressionModel]) -> RegressionModel:
    """
    Pick the model with the strictly highest R²; the first seen wins ties.

    Raises:
        ValueError: If no models are given.
    """
    if not models:
        raise ValueError("select_best_model requires at least one model")

    best = models[0]
    for model in models[1:]:
        if model.r_squared > best.r_squared:
            best = model
    return best


def classify_fit(r_squared: float) -> AnalysisType:
    """
    Map the selected model's R² to an analysis state.

    | R²          | state          |
    |-------------|----------------|
    | < 0.2       | basic          |
    | 0.2 - 0.4   | low_confidence |
    | >= 0.4      | advanced       |
    """
    if r_squared < BASIC_R_SQUARED_CUTOFF:
        return AnalysisType.BASIC
    if r_squared < ADVANCED_R_SQUARED_CUTOFF:
        return AnalysisType.LOW_CONFIDENCE
    return AnalysisType.ADVANCED


# =============================================================================
# Optimizer
# =============================================================================


def marginal_leads_per_dollar(model: RegressionModel, spend: float) -> float:
    """
    Forward-difference derivative of predicted leads at `spend`.

    Uses a 1% step: (predict(s + δ) - predict(s)) / δ with δ = 0.01*s.
    Returns 0 for non-positive spend.
    """
    if spend <= 0:
        return 0.0

    delta = spend * MARGINAL_STEP_FRACTION
    return (model.predict(spend + delta) - model.predict(spend)) / delta


def find_optimal_spend(
    model: RegressionModel,
    min_spend: float,
    max_spend: float
) -> float:
    """
    Find the daily spend with the best incremental return.

    A concave quadratic has an interior maximum at its vertex -b/(2a), which
    is clamped into [min_spend, max_spend]. Every other curve is scanned at
    OPTIMIZER_SCAN_POINTS equally spaced spends, keeping the one with the
    highest marginal leads per dollar divided by spend. The scan never leaves
    the observed range, so a convex quadratic may land on a boundary.

    Returns:
        Optimal spend within [min_spend, max_spend].
    """
    if model.kind == RegressionKind.QUADRATIC:
        a, b = model.coefficients[0], model.coefficients[1]
        if a < 0:
            vertex = -b / (2 * a)
            return max(min_spend, min(max_spend, vertex))

    step = (max_spend - min_spend) / (OPTIMIZER_SCAN_POINTS - 1)
    best_spend = min_spend
    best_efficiency = 0.0

    for i in range(OPTIMIZER_SCAN_POINTS):
        spend = min_spend + i * step
        if spend <= 0:
            continue
        efficiency = marginal_leads_per_dollar(model, spend) / spend
        if efficiency > best_efficiency:
            best_efficiency = efficiency
            best_spend = spend

    return best_spend


# =============================================================================
# Result Builders
# =============================================================================


def build_gathering_result(data_points: int = 0) -> OptimizationResult:
    """Result for campaigns with fewer than MIN_DATA_POINTS usable days."""
    return OptimizationResult(
        optimalDailySpend=0,
        currentEfficiency=0,
        confidenceScore=0,
        recommendation=gathering_message(data_points, MIN_DATA_POINTS),
        marginalLeadsPerDollar=0.0,
        projectedLeadIncrease=0,
        analysisType=AnalysisType.GATHERING,
    )


def build_basic_analysis(
    recent_data: Sequence[HistoryPoint],
    analysis_type: AnalysisType,
    benchmark_cpl: float = BENCHMARK_CPL
) -> OptimizationResult:
    """
    Benchmark analysis used when curve fitting is skipped or untrustworthy.

    Compares the window's average cost per lead with `benchmark_cpl`.

    Args:
        recent_data: The selected history window (non-empty).
        analysis_type: INSUFFICIENT_VARIATION or BASIC.
        benchmark_cpl: Industry benchmark cost per lead.

    Returns:
        OptimizationResult tagged with `analysis_type`.
    """
    spends, leads = _points(recent_data)
    avg_spend = float(spends.mean())
    avg_leads = float(leads.mean())

    current_cpl = avg_spend / avg_leads if avg_leads > 0 else 0.0

    if current_cpl > 0:
        efficiency = min(100.0, 100.0 * benchmark_cpl / current_cpl)
    else:
        efficiency = NEUTRAL_EFFICIENCY

    if analysis_type == AnalysisType.INSUFFICIENT_VARIATION:
        multiplier = VARIATION_TEST_MULTIPLIER
        confidence = INSUFFICIENT_VARIATION_CONFIDENCE
        recommendation = insufficient_variation_message(avg_spend)
    else:
        if current_cpl > 1.2 * benchmark_cpl:
            multiplier = REDUCE_SPEND_MULTIPLIER
        elif current_cpl < 0.8 * benchmark_cpl and efficiency > 70:
            multiplier = INCREASE_SPEND_MULTIPLIER
        else:
            multiplier = 1.0
        confidence = BASIC_CONFIDENCE
        recommendation = basic_message(current_cpl, benchmark_cpl, multiplier)

    optimal_spend = avg_spend * multiplier
    marginal = avg_leads / avg_spend if avg_spend > 0 else 0.0

    return OptimizationResult(
        optimalDailySpend=round_half_up(optimal_spend),
        currentEfficiency=round_half_up(efficiency),
        confidenceScore=confidence,
        recommendation=recommendation,
        marginalLeadsPerDollar=marginal,
        projectedLeadIncrease=round_half_up((optimal_spend - avg_spend) * marginal),
        analysisType=analysis_type,
    )


def build_curve_analysis(
    model: RegressionModel,
    recent_data: Sequence[HistoryPoint],
    analysis_type: AnalysisType
) -> OptimizationResult:
    """
    Curve-based recommendation for LOW_CONFIDENCE and ADVANCED fits.

    Args:
        model: The selected regression model.
        recent_data: The selected history window.
        analysis_type: LOW_CONFIDENCE or ADVANCED.
    """
    spends, _ = _points(recent_data)
    min_spend = float(spends.min())
    max_spend = float(spends.max())
    avg_spend = float(spends.mean())

    optimal_spend = find_optimal_spend(model, min_spend, max_spend)

    optimal_leads = model.predict(optimal_spend)
    current_leads = model.predict(avg_spend)

    if optimal_leads > 0:
        efficiency = min(100.0, 100.0 * current_leads / optimal_leads)
    else:
        efficiency = 0.0

    low_confidence = analysis_type == AnalysisType.LOW_CONFIDENCE
    confidence = round_half_up(model.r_squared * 100)
    if low_confidence:
        confidence = min(confidence, LOW_CONFIDENCE_SCORE_CAP)

    return OptimizationResult(
        optimalDailySpend=round_half_up(optimal_spend),
        currentEfficiency=round_half_up(efficiency),
        confidenceScore=confidence,
        recommendation=format_spend_delta(optimal_spend, avg_spend, low_confidence),
        marginalLeadsPerDollar=marginal_leads_per_dollar(model, avg_spend),
        projectedLeadIncrease=round_half_up(optimal_leads - current_leads),
        analysisType=analysis_type,
    )


# =============================================================================
# Main Entry Point
# =============================================================================


def compute_optimal_spend(
    history: Optional[Sequence[HistoryPoint]],
    history_window: int = HISTORY_WINDOW,
    benchmark_cpl: float = BENCHMARK_CPL
) -> Optional[OptimizationResult]:
    """
    Compute the spend recommendation for one campaign.

    Process:
        1. Select the usable window (gathering if < 5 days)
        2. Gate on spend variation (insufficient_variation)
        3. Fit logarithmic, quadratic and linear curves
        4. Select the best fit and classify it (basic / low_confidence / advanced)
        5. Optimize along the chosen curve and build the result

    Args:
        history: Daily stats for the campaign, newest first. The sequence is
            only read.
        history_window: Maximum number of usable days analyzed.
        benchmark_cpl: Benchmark cost per lead for the basic analysis.

    Returns:
        OptimizationResult, or None when `history` is None.

    Example:
        >>> result = compute_optimal_spend([])
        >>> result.analysisType
        <AnalysisType.GATHERING: 'gathering'>
        >>> compute_optimal_spend(None) is None
        True
    """
    if history is None:
        return None

    recent_data = select_recent_data(history, history_window)

    if len(recent_data) < MIN_DATA_POINTS:
        return build_gathering_result(len(recent_data))

    spends = [point.adSpend for point in recent_data]
    if not has_sufficient_variation(spends):
        return build_basic_analysis(
            recent_data, AnalysisType.INSUFFICIENT_VARIATION, benchmark_cpl
        )

    best_model = select_best_model(fit_models(recent_data))
    analysis_type = classify_fit(best_model.r_squared)

    logger.debug(
        f"Selected {best_model.kind.value} model "
        f"(r2={best_model.r_squared:.3f}) over {len(recent_data)} days: "
        f"{analysis_type.value}"
    )

    if analysis_type == AnalysisType.BASIC:
        return build_basic_analysis(recent_data, AnalysisType.BASIC, benchmark_cpl)

    return build_curve_analysis(best_model, recent_data, analysis_type)
