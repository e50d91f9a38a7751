"""
Recommendation wording for spend optimization results.

Keeps display strings out of the numeric engine in spend_optimization.py.
Only the numeric fields of OptimizationResult are contractual; the strings
here are what the dashboard badge tooltip shows.
"""

import math

# Fractional band around current spend that counts as already optimal
OPTIMAL_RANGE_TOLERANCE: float = 0.10


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves toward positive infinity.

    Matches the dashboard's rounding, unlike the built-in round() which
    rounds halves to even.

    Example:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -2
    """
    return math.floor(value + 0.5)


def gathering_message(data_points: int, required: int) -> str:
    """Message for campaigns without enough spend history to analyze."""
    return (
        f"Collecting data - {data_points} of {required} days with ad spend "
        f"recorded"
    )


def insufficient_variation_message(avg_spend: float) -> str:
    """Ask the user to vary spend so the response curve can be fitted."""
    low = round_half_up(avg_spend * 0.8)
    high = round_half_up(avg_spend * 1.2)
    return (
        f"Spend has been too steady to optimize - vary daily spend by "
        f"±20% (${low}-${high}/day) to enable optimization"
    )


def basic_message(current_cpl: float, benchmark_cpl: float, multiplier: float) -> str:
    """
    Benchmark-based recommendation used when no curve can be trusted.

    Args:
        current_cpl: Average cost per lead over the analyzed window, 0 when
            no leads were recorded.
        benchmark_cpl: Industry benchmark cost per lead.
        multiplier: Suggested spend multiplier (0.8, 1.0 or 1.3).
    """
    if current_cpl <= 0:
        return "No leads recorded yet - keep current spend until leads come in"
    if multiplier < 1.0:
        return (
            f"CPL ${round_half_up(current_cpl)} is above the ${round_half_up(benchmark_cpl)} "
            f"benchmark - reduce spend by {round_half_up((1 - multiplier) * 100)}%"
        )
    if multiplier > 1.0:
        return (
            f"CPL ${round_half_up(current_cpl)} beats the ${round_half_up(benchmark_cpl)} "
            f"benchmark - increase spend by {round_half_up((multiplier - 1) * 100)}%"
        )
    return "Maintain current spend - CPL is near benchmark"


def format_spend_delta(
    optimal_spend: float,
    current_spend: float,
    low_confidence: bool = False
) -> str:
    """
    Describe the move from current average spend to the optimal spend.

    Within OPTIMAL_RANGE_TOLERANCE of current spend the campaign is already
    in its optimal range; otherwise a signed dollar delta is returned.

    Example:
        >>> format_spend_delta(300.0, 250.0)
        'Increase by $50/day'
        >>> format_spend_delta(240.0, 250.0)
        'Optimal spend range'
    """
    difference = optimal_spend - current_spend

    if abs(difference) < current_spend * OPTIMAL_RANGE_TOLERANCE:
        text = "Optimal spend range"
    elif difference > 0:
        text = f"Increase by ${round_half_up(difference)}/day"
    else:
        text = f"Decrease by ${round_half_up(abs(difference))}/day"

    if low_confidence:
        text += " (low confidence)"

    return text
