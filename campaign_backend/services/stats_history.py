"""
Stats History Reader Service.

Read-only access to campaigns and their daily stats history in the
dashboard's Supabase PostgreSQL database. Supplies the spend optimization
engine with HistoryPoint sequences ordered newest first.

Tables:
    - campaigns (id, name, platform, is_active, workspace_id)
    - campaign_stats_history (campaign_id, date, ad_spend, leads, ...)

Dependencies:
    - asyncpg via get_db_pool: Database connectivity
    - Parameterized SQL from campaign_backend/sql/stats_queries.py
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from campaign_backend.core.database import get_db_pool
from campaign_backend.models.schemas import HistoryPoint
from campaign_backend.sql.stats_queries import (
    DEFAULT_HISTORY_WINDOW,
    get_bulk_stats_history_query,
    get_campaign_list_query,
    get_campaign_query,
    get_stats_history_query,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Row Conversion
# =============================================================================


def row_to_history_point(row: Any) -> HistoryPoint:
    """
    Convert a campaign_stats_history row into a HistoryPoint.

    NULL ad_spend is kept as None (the engine drops it); NULL leads become 0.
    """
    ad_spend = row['ad_spend']
    leads = row['leads']

    return HistoryPoint(
        date=str(row['date']),
        adSpend=float(ad_spend) if ad_spend is not None else None,
        leads=int(leads) if leads is not None else 0,
    )


# =============================================================================
# Campaign Lookups
# =============================================================================


async def fetch_campaign(campaign_id: str) -> Optional[Dict[str, Any]]:
    """
    Fetch a single campaign.

    Returns:
        Dict with id, name, platform, is_active and workspace_id, or None if
        the campaign does not exist.
    """
    pool = await get_db_pool()

    async with pool.acquire() as conn:
        row = await conn.fetchrow(get_campaign_query(), campaign_id)

    if row is None:
        return None
    return dict(row)


async def fetch_campaigns(
    workspace_id: Optional[str] = None,
    active_only: bool = True
) -> List[Dict[str, Any]]:
    """
    List campaigns, optionally scoped to a workspace.

    Args:
        workspace_id: Restrict to this workspace when given.
        active_only: Skip campaigns with is_active = false.
    """
    query = get_campaign_list_query(
        workspace_scoped=workspace_id is not None,
        active_only=active_only
    )
    params: List[Any] = [workspace_id] if workspace_id is not None else []

    pool = await get_db_pool()

    async with pool.acquire() as conn:
        rows = await conn.fetch(query, *params)

    return [dict(row) for row in rows]


# =============================================================================
# Stats History
# =============================================================================


async def fetch_stats_history(
    campaign_id: str,
    limit: int = DEFAULT_HISTORY_WINDOW
) -> List[HistoryPoint]:
    """
    Fetch the most recent spend days of a campaign, newest first.

    Args:
        campaign_id: Campaign identifier.
        limit: Maximum number of days returned.
    """
    pool = await get_db_pool()

    async with pool.acquire() as conn:
        rows = await conn.fetch(get_stats_history_query(), campaign_id, limit)

    return [row_to_history_point(row) for row in rows]


async def fetch_stats_history_for_campaigns(
    campaign_ids: Sequence[str],
    limit: int = DEFAULT_HISTORY_WINDOW
) -> Dict[str, List[HistoryPoint]]:
    """
    Fetch the spend windows of several campaigns in one query.

    Returns:
        Mapping of campaign id to its history, newest first. Every requested
        id is present; campaigns without rows map to an empty list.
    """
    histories: Dict[str, List[HistoryPoint]] = {
        campaign_id: [] for campaign_id in campaign_ids
    }

    if not campaign_ids:
        return histories

    pool = await get_db_pool()

    async with pool.acquire() as conn:
        rows = await conn.fetch(
            get_bulk_stats_history_query(),
            list(campaign_ids),
            limit
        )

    for row in rows:
        histories.setdefault(row['campaign_id'], []).append(row_to_history_point(row))

    logger.debug(f"Loaded stats history for {len(histories)} campaigns ({len(rows)} rows)")

    return histories
