"""
Campaign Spend Recommendation Service.

Joins the stats-history reader with the spend optimization engine: loads a
campaign's recent spend days and returns the engine's recommendation wrapped
with the campaign's identity. Each campaign is evaluated independently; no
budget is allocated across campaigns.

Usage:
    from campaign_backend.services.campaign_recommendations import (
        recommend_for_campaign,
        recommend_for_campaigns,
    )

    recommendation = await recommend_for_campaign("6f1c2d7e-...")
    dashboard = await recommend_for_campaigns(workspace_id="ws_123")
"""

import logging
from typing import List, Optional

from campaign_backend.models.schemas import CampaignSpendRecommendation
from campaign_backend.services.spend_optimization import (
    BENCHMARK_CPL,
    HISTORY_WINDOW,
    compute_optimal_spend,
)
from campaign_backend.services.stats_history import (
    fetch_campaign,
    fetch_campaigns,
    fetch_stats_history,
    fetch_stats_history_for_campaigns,
)


logger = logging.getLogger(__name__)


async def recommend_for_campaign(
    campaign_id: str,
    history_window: int = HISTORY_WINDOW,
    benchmark_cpl: float = BENCHMARK_CPL
) -> Optional[CampaignSpendRecommendation]:
    """
    Compute the spend recommendation for one stored campaign.

    Args:
        campaign_id: Campaign identifier.
        history_window: Maximum number of spend days analyzed.
        benchmark_cpl: Benchmark cost per lead for the basic analysis.

    Returns:
        CampaignSpendRecommendation, or None if the campaign does not exist.
    """
    campaign = await fetch_campaign(campaign_id)
    if campaign is None:
        return None

    history = await fetch_stats_history(campaign_id, history_window)
    result = compute_optimal_spend(
        history,
        history_window=history_window,
        benchmark_cpl=benchmark_cpl
    )

    return CampaignSpendRecommendation(
        campaignId=campaign['id'],
        campaignName=campaign['name'],
        dataPoints=len(history),
        result=result,
    )


async def recommend_for_campaigns(
    workspace_id: Optional[str] = None,
    active_only: bool = True,
    history_window: int = HISTORY_WINDOW,
    benchmark_cpl: float = BENCHMARK_CPL
) -> List[CampaignSpendRecommendation]:
    """
    Compute spend recommendations for every campaign in scope.

    Histories are loaded in a single query. A campaign whose computation
    fails is logged and left out; the others are still returned.

    Args:
        workspace_id: Restrict to this workspace when given.
        active_only: Skip inactive campaigns.
        history_window: Maximum number of spend days analyzed per campaign.
        benchmark_cpl: Benchmark cost per lead for the basic analysis.

    Returns:
        One CampaignSpendRecommendation per campaign, ordered by name.
    """
    campaigns = await fetch_campaigns(workspace_id=workspace_id, active_only=active_only)
    if not campaigns:
        return []

    histories = await fetch_stats_history_for_campaigns(
        [campaign['id'] for campaign in campaigns],
        history_window
    )

    recommendations: List[CampaignSpendRecommendation] = []

    for campaign in campaigns:
        history = histories.get(campaign['id'], [])

        try:
            result = compute_optimal_spend(
                history,
                history_window=history_window,
                benchmark_cpl=benchmark_cpl
            )
        except Exception as e:
            logger.warning(f"Spend optimization failed for campaign {campaign['id']}: {e}")
            continue

        recommendations.append(CampaignSpendRecommendation(
            campaignId=campaign['id'],
            campaignName=campaign['name'],
            dataPoints=len(history),
            result=result,
        ))

    logger.info(f"Computed spend recommendations for {len(recommendations)} of {len(campaigns)} campaigns")

    return recommendations
