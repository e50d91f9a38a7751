"""
FastAPI router module for Spend Optimization endpoints.

Exposes the spend optimization engine to the dashboard, which renders each
result as the optimal-spend badge with a tooltip mapped 1:1 to the result's
fields.

Key Endpoints:
- POST /spend-optimization/analyze: Analyze an explicit stats history
- GET /spend-optimization/campaigns: Recommendations for all campaigns in scope
- GET /spend-optimization/campaigns/{campaign_id}: Recommendation for one campaign

Design Requirements:
- Results are recomputed on every request against the latest history
- analysisType is the discriminant the frontend switches on
- Each campaign is evaluated independently (no cross-campaign allocation)

Dependencies:
- campaign_backend/services/spend_optimization.py: the engine
- campaign_backend/services/campaign_recommendations.py: history + engine
- campaign_backend/core/dependencies.py: SettingsDep for tuning defaults
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from campaign_backend.core.dependencies import SettingsDep
from campaign_backend.models.schemas import (
    CampaignSpendRecommendation,
    OptimizationResult,
    SpendOptimizationRequest,
)
from campaign_backend.services.campaign_recommendations import (
    recommend_for_campaign,
    recommend_for_campaigns,
)
from campaign_backend.services.spend_optimization import compute_optimal_spend


# =============================================================================
# Module Configuration
# =============================================================================

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/spend-optimization", tags=["spend-optimization"])


# =============================================================================
# API Endpoints
# =============================================================================

@router.post(
    "/analyze",
    response_model=Optional[OptimizationResult],
    summary="Analyze Stats History",
)
async def analyze_history(
    request: SpendOptimizationRequest,
    settings: SettingsDep,
) -> Optional[OptimizationResult]:
    """
    Run the spend optimization engine on a caller-supplied history.

    Args:
        request: Body carrying the daily stats history, newest first.
        settings: Application settings (history window, benchmark CPL).

    Returns:
        OptimizationResult, or null when the request's history is null.
        An empty history yields a 'gathering' result.
    """
    points = len(request.history) if request.history is not None else 0
    logger.info(f"Analyzing ad-hoc stats history ({points} points)")

    return compute_optimal_spend(
        request.history,
        history_window=settings.spend_history_window,
        benchmark_cpl=settings.benchmark_cpl,
    )


@router.get(
    "/campaigns",
    response_model=List[CampaignSpendRecommendation],
    summary="List Campaign Spend Recommendations",
)
async def list_campaign_recommendations(
    settings: SettingsDep,
    workspace_id: Optional[str] = Query(
        default=None,
        description="Restrict to campaigns in this workspace"
    ),
    active_only: bool = Query(
        default=True,
        description="Skip inactive campaigns"
    ),
) -> List[CampaignSpendRecommendation]:
    """
    Compute spend recommendations for every campaign in scope.

    Campaigns whose computation fails are left out of the response.

    Raises:
        HTTPException 500: If loading campaigns or their history fails.
    """
    logger.info(f"Computing spend recommendations for workspace={workspace_id}, active_only={active_only}")

    try:
        return await recommend_for_campaigns(
            workspace_id=workspace_id,
            active_only=active_only,
            history_window=settings.spend_history_window,
            benchmark_cpl=settings.benchmark_cpl,
        )
    except Exception as e:
        logger.error(f"Error computing spend recommendations: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Failed to compute spend recommendations: {str(e)}",
        )


@router.get(
    "/campaigns/{campaign_id}",
    response_model=CampaignSpendRecommendation,
    summary="Get Campaign Spend Recommendation",
)
async def get_campaign_recommendation(
    campaign_id: str,
    settings: SettingsDep,
) -> CampaignSpendRecommendation:
    """
    Compute the spend recommendation for a stored campaign.

    Args:
        campaign_id: Campaign identifier.
        settings: Application settings (history window, benchmark CPL).

    Raises:
        HTTPException 404: If the campaign does not exist.
        HTTPException 500: If loading the campaign or its history fails.
    """
    logger.info(f"Computing spend recommendation for campaign={campaign_id}")

    try:
        recommendation = await recommend_for_campaign(
            campaign_id,
            history_window=settings.spend_history_window,
            benchmark_cpl=settings.benchmark_cpl,
        )

        if recommendation is None:
            logger.warning(f"Campaign {campaign_id} not found")
            raise HTTPException(
                status_code=404,
                detail=f"Campaign {campaign_id} not found",
            )

        return recommendation

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error computing spend recommendation for campaign={campaign_id}: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to compute spend recommendation: {str(e)}",
        )
