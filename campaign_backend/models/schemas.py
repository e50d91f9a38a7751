"""
Pydantic request/response models for the campaign dashboard backend.

This module provides type-safe data validation and serialization for the
spend optimization API contracts: the daily stats history fed to the engine,
the engine's result, and the per-campaign wrappers returned by the routers.

Field names are camelCase to match the dashboard's existing JSON contract
(campaign_stats_history rows are mapped to StatHistoryEntry-style objects
on the frontend).

All models use Pydantic v2 syntax with proper field validation and examples.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from campaign_backend.models.enums import AnalysisType


# =============================================================================
# Stats History Models
# =============================================================================


class HistoryPoint(BaseModel):
    """
    One daily observation of a campaign's ad spend and lead count.

    Source: campaign_stats_history table (date, ad_spend, leads)

    ad_spend is nullable in storage; None and non-positive values are dropped
    by the engine's data selector, as are negative lead counts.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "date": "2026-01-15",
                "adSpend": 250.0,
                "leads": 12
            }
        }
    )

    date: str = Field(
        ...,
        description="Calendar date of the observation (YYYY-MM-DD)"
    )
    adSpend: Optional[float] = Field(
        default=None,
        description="Ad spend for the day in dollars"
    )
    leads: int = Field(
        default=0,
        description="Leads generated on the day"
    )


# =============================================================================
# Spend Optimization Models
# =============================================================================


class OptimizationResult(BaseModel):
    """
    Spend optimization recommendation for a single campaign.

    analysisType is the discriminant: it determines which path produced the
    numeric fields (see AnalysisType). A gathering result has every numeric
    field set to zero.
    """
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "optimalDailySpend": 320,
                "currentEfficiency": 87,
                "confidenceScore": 72,
                "recommendation": "Increase by $45/day",
                "marginalLeadsPerDollar": 0.034,
                "projectedLeadIncrease": 2,
                "analysisType": "advanced"
            }
        }
    )

    optimalDailySpend: float = Field(
        ...,
        ge=0.0,
        description="Recommended daily spend in whole dollars"
    )
    currentEfficiency: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        description="How close current spend is to the optimum (0-100)"
    )
    confidenceScore: float = Field(
        ...,
        ge=0.0,
        le=100.0,
        description="Trust in the recommendation (0-100)"
    )
    recommendation: str = Field(
        ...,
        description="Human-readable recommendation"
    )
    marginalLeadsPerDollar: float = Field(
        ...,
        description="Incremental leads per extra dollar at current spend"
    )
    projectedLeadIncrease: float = Field(
        ...,
        description="Predicted change in daily leads at the optimal spend"
    )
    analysisType: AnalysisType = Field(
        ...,
        description="Computation path that produced this result"
    )


class SpendOptimizationRequest(BaseModel):
    """
    Ad-hoc spend optimization request carrying an explicit history.

    A null history yields a null result; an empty history yields a
    gathering result.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "history": [
                    {"date": "2026-01-15", "adSpend": 250.0, "leads": 12},
                    {"date": "2026-01-14", "adSpend": 180.0, "leads": 9}
                ]
            }
        }
    )

    history: Optional[List[HistoryPoint]] = Field(
        default=None,
        description="Daily stats, newest first"
    )


class CampaignSpendRecommendation(BaseModel):
    """
    Spend optimization result for a stored campaign.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "campaignId": "6f1c2d7e-0000-4000-8000-000000000001",
                "campaignName": "Camp Lejeune - Search",
                "dataPoints": 42,
                "result": None
            }
        }
    )

    campaignId: str = Field(
        ...,
        description="Campaign identifier"
    )
    campaignName: str = Field(
        ...,
        description="Campaign display name"
    )
    dataPoints: int = Field(
        default=0,
        ge=0,
        description="Number of history rows handed to the engine"
    )
    result: Optional[OptimizationResult] = Field(
        default=None,
        description="Engine output"
    )
