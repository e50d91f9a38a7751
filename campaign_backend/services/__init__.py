"""
Backend Services Module

Business logic services for the campaign dashboard backend. The engine is
stateless and free of I/O; database access is confined to stats_history.

Services:
- spend_optimization: Spend Optimization Engine (curve fitting + optimizer)
- recommendation_text: Recommendation wording for optimization results
- stats_history: Read-only campaign and stats-history access
- campaign_recommendations: Stats history fed through the engine per campaign

All services are designed to be consumed by the API layer (campaign_backend/api/).
"""

# =============================================================================
# Spend Optimization Engine Exports
# =============================================================================

from campaign_backend.services.spend_optimization import (
    compute_optimal_spend,
    select_recent_data,
    has_sufficient_variation,
    fit_logarithmic_model,
    fit_quadratic_model,
    fit_linear_model,
    fit_models,
    select_best_model,
    classify_fit,
    find_optimal_spend,
    marginal_leads_per_dollar,
    RegressionModel,
)

# =============================================================================
# Stats History Exports
# =============================================================================

from campaign_backend.services.stats_history import (
    fetch_campaign,
    fetch_campaigns,
    fetch_stats_history,
    fetch_stats_history_for_campaigns,
)

# =============================================================================
# Campaign Recommendation Exports
# =============================================================================

from campaign_backend.services.campaign_recommendations import (
    recommend_for_campaign,
    recommend_for_campaigns,
)

__all__ = [
    # ----- Spend Optimization Engine -----
    'compute_optimal_spend',
    'select_recent_data',
    'has_sufficient_variation',
    'fit_logarithmic_model',
    'fit_quadratic_model',
    'fit_linear_model',
    'fit_models',
    'select_best_model',
    'classify_fit',
    'find_optimal_spend',
    'marginal_leads_per_dollar',
    'RegressionModel',
    # ----- Stats History -----
    'fetch_campaign',
    'fetch_campaigns',
    'fetch_stats_history',
    'fetch_stats_history_for_campaigns',
    # ----- Campaign Recommendations -----
    'recommend_for_campaign',
    'recommend_for_campaigns',
]
