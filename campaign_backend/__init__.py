"""
Campaign Dashboard Backend Package.

FastAPI service layer for the marketing-operations dashboard. Hosts the spend
optimization engine that turns a campaign's daily spend/lead history into a
recommended daily budget.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration, database, and dependencies
    - models: Pydantic schemas and enums
    - services: Spend optimization engine and stats-history access
    - sql: Parameterized SQL queries
"""

__version__ = "1.0.0"
