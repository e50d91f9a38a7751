"""
Core infrastructure package for the FastAPI backend.

Provides:
- Configuration management via pydantic-settings
- Async PostgreSQL database connectivity via asyncpg
- FastAPI dependency injection utilities

Re-exports key components so other modules can write:

    from campaign_backend.core import get_settings, get_db_pool, SettingsDep

instead of importing from the individual submodules.
"""

# =============================================================================
# Re-exports from campaign_backend.core.config
# =============================================================================
from campaign_backend.core.config import Settings, get_settings

# =============================================================================
# Re-exports from campaign_backend.core.database
# =============================================================================
from campaign_backend.core.database import init_db, close_db, get_db_pool

# =============================================================================
# Re-exports from campaign_backend.core.dependencies
# =============================================================================
from campaign_backend.core.dependencies import (
    get_settings_dependency,
    SettingsDep,
)

__all__ = [
    # Configuration management (from config.py)
    'Settings',
    'get_settings',
    # Database pool lifecycle (from database.py)
    'init_db',
    'close_db',
    'get_db_pool',
    # FastAPI dependency injection (from dependencies.py)
    'get_settings_dependency',
    'SettingsDep',
]
