"""
Enumeration definitions for the campaign dashboard backend.

All enums inherit from both `str` and `Enum` to ensure JSON serialization
compatibility with Pydantic models, so API responses carry the plain string
values the dashboard frontend switches on.
"""

from enum import Enum


class AnalysisType(str, Enum):
    """
    Analysis state of a spend optimization result.

    Values: 'gathering' | 'insufficient_variation' | 'basic' |
    'low_confidence' | 'advanced'

    The analysis type is the discriminant of the result: it identifies which
    computation path produced the numeric fields and how much trust they
    warrant. Consumers switch on it rather than on the presence of fields.

    - gathering: Fewer than 5 usable spend days, all numbers are zero
    - insufficient_variation: Spend barely moved, benchmark-based analysis
    - basic: Best curve explains < 20% of lead variance, benchmark-based analysis
    - low_confidence: Curve-based optimum from a marginal fit (R² 0.2-0.4)
    - advanced: Curve-based optimum from a good fit (R² >= 0.4)
    """
    GATHERING = "gathering"
    INSUFFICIENT_VARIATION = "insufficient_variation"
    BASIC = "basic"
    LOW_CONFIDENCE = "low_confidence"
    ADVANCED = "advanced"


class RegressionKind(str, Enum):
    """
    Shape of a fitted spend -> leads response curve.

    - logarithmic: leads = a*ln(spend) + b (diminishing returns)
    - quadratic: leads = a*spend^2 + b*spend + c (rise then fall when a < 0)
    - linear: leads = a*spend + b (baseline)
    """
    LOGARITHMIC = "logarithmic"
    QUADRATIC = "quadratic"
    LINEAR = "linear"
