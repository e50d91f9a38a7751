"""
Stats History Queries Module for the campaign dashboard backend.

Provides parameterized PostgreSQL queries over the dashboard's Supabase
tables for the spend optimization engine:

- campaigns: id, name, platform, is_active, workspace_id
- campaign_stats_history: campaign_id, date, ad_spend, leads, cases, revenue

Only days with ad_spend > 0 and leads >= 0 are returned, newest first,
limited to the analysis window. The engine applies the same filter again,
so these queries only trim what crosses the wire.

This module follows the Repository Pattern for clean separation between
business logic and data access. All values are passed as $n parameters.
"""


# =============================================================================
# CONSTANTS
# =============================================================================

# Default number of spend days fetched per campaign
DEFAULT_HISTORY_WINDOW: int = 60

_CAMPAIGN_COLUMNS = """
        id::text AS id,
        name,
        platform,
        is_active,
        workspace_id::text AS workspace_id
"""


# =============================================================================
# CAMPAIGN QUERIES
# =============================================================================

def get_campaign_query() -> str:
    """
    Generate SQL to fetch a single campaign by id.

    Parameters:
        $1: campaign id
    """
    return f"""
    SELECT{_CAMPAIGN_COLUMNS}
    FROM campaigns
    WHERE id::text = $1
    """


def get_campaign_list_query(
    workspace_scoped: bool = False,
    active_only: bool = True
) -> str:
    """
    Generate SQL to list campaigns, optionally scoped to a workspace.

    Parameters:
        $1: workspace id (only when workspace_scoped is True)

    Returns:
        Parameterized query ordered by campaign name.
    """
    query = f"""
    SELECT{_CAMPAIGN_COLUMNS}
    FROM campaigns
    WHERE TRUE
    """

    if workspace_scoped:
        query += " AND workspace_id::text = $1"

    if active_only:
        query += " AND is_active"

    query += " ORDER BY name ASC"
    return query


# =============================================================================
# STATS HISTORY QUERIES
# =============================================================================

def get_stats_history_query() -> str:
    """
    Generate SQL to fetch the spend window of one campaign, newest first.

    Parameters:
        $1: campaign id
        $2: maximum number of days
    """
    return """
    SELECT
        date::text AS date,
        ad_spend,
        leads
    FROM campaign_stats_history
    WHERE campaign_id::text = $1
      AND ad_spend > 0
      AND leads >= 0
    ORDER BY date DESC
    LIMIT $2
    """


def get_bulk_stats_history_query() -> str:
    """
    Generate SQL to fetch the spend window of many campaigns in one round trip.

    ROW_NUMBER() keeps at most $2 rows per campaign, newest first.

    Parameters:
        $1: array of campaign ids (text[])
        $2: maximum number of days per campaign
    """
    return """
    SELECT campaign_id, date, ad_spend, leads
    FROM (
        SELECT
            campaign_id::text AS campaign_id,
            date::text AS date,
            ad_spend,
            leads,
            ROW_NUMBER() OVER (
                PARTITION BY campaign_id
                ORDER BY date DESC
            ) AS rn
        FROM campaign_stats_history
        WHERE campaign_id::text = ANY($1::text[])
          AND ad_spend > 0
          AND leads >= 0
    ) ranked
    WHERE rn <= $2
    ORDER BY campaign_id, date DESC
    """
