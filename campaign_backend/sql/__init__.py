"""
SQL Query Module for the campaign dashboard backend.

Provides parameterized SQL queries for reading campaigns and their daily
stats history (stats_queries). Follows the Repository Pattern for clean
separation between business logic and data access.

Example usage:
    from campaign_backend.sql import get_stats_history_query, DEFAULT_HISTORY_WINDOW

    rows = await conn.fetch(get_stats_history_query(), campaign_id, DEFAULT_HISTORY_WINDOW)
"""

from campaign_backend.sql.stats_queries import (
    DEFAULT_HISTORY_WINDOW,
    get_campaign_query,
    get_campaign_list_query,
    get_stats_history_query,
    get_bulk_stats_history_query,
)

__all__ = [
    'DEFAULT_HISTORY_WINDOW',
    'get_campaign_query',
    'get_campaign_list_query',
    'get_stats_history_query',
    'get_bulk_stats_history_query',
]
