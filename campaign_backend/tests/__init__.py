'''
Campaign Dashboard Backend Test Suite

Test Modules:
-------------
- test_spend_optimization.py: Spend Optimization Engine tests
  - Data selection window and filtering
  - Variation gate thresholds
  - Logarithmic / quadratic / linear fits and R² bounds
  - Model selection, classification and the optimizer
  - Basic analysis and end-to-end scenarios

- test_recommendation_text.py: Recommendation wording

- test_stats_history.py: Stats history reader and per-campaign recommendations
  - Row conversion (NULL ad_spend, Decimal spend)
  - Mocked asyncpg pool queries
  - Batch recommendations skip failing campaigns

- test_api.py: Spend optimization router functions
  - Null / empty history handling
  - 404 and 500 error mapping

Running Tests:
--------------
    pytest campaign_backend/tests/ -v
    pytest campaign_backend/tests/test_spend_optimization.py -m scenario
'''
