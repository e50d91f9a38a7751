"""
FastAPI dependency injection module for the campaign dashboard backend.

Provides reusable FastAPI dependencies for configuration access so endpoint
handlers stay decoupled from infrastructure and can be exercised in tests
with mocks.

Key Dependencies Provided:
- get_settings_dependency: Returns the cached Settings singleton
- SettingsDep: Type alias for injecting Settings into endpoints

Usage Examples:
    @router.get("/spend-optimization/campaigns/{campaign_id}")
    async def get_campaign_recommendation(
        campaign_id: str,
        settings: SettingsDep
    ) -> CampaignSpendRecommendation:
        ...

In tests, the dependency override mechanism swaps in mocks:
    app.dependency_overrides[get_settings_dependency] = lambda: mock_settings
"""

from typing import Annotated

from fastapi import Depends

from campaign_backend.core.config import Settings, get_settings


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    Thin wrapper around get_settings() so FastAPI's dependency override
    mechanism can replace it in tests.
    """
    return get_settings()


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================

SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]
