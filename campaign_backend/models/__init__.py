"""
Package initialization file for backend models.

Exports all Pydantic schemas and enumerations from schemas.py and enums.py,
making them importable from campaign_backend.models directly.

Usage:
    from campaign_backend.models import (
        AnalysisType,
        HistoryPoint,
        OptimizationResult,
    )
"""

# =============================================================================
# Enums
# =============================================================================

from campaign_backend.models.enums import (
    AnalysisType,
    RegressionKind,
)

# =============================================================================
# Schemas
# =============================================================================

from campaign_backend.models.schemas import (
    HistoryPoint,
    OptimizationResult,
    SpendOptimizationRequest,
    CampaignSpendRecommendation,
)

__all__ = [
    # ----- Enums -----
    'AnalysisType',
    'RegressionKind',
    # ----- Schemas -----
    'HistoryPoint',
    'OptimizationResult',
    'SpendOptimizationRequest',
    'CampaignSpendRecommendation',
]
