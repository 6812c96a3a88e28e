"""
Meal Browser client library.

Loads diets, meals and categories from the meal API and keeps a
filtered meal list in sync with the user's search text and
category selection.

Structure:
- domain/: Catalog models, mapper and the pure filter engine
- application/: Meal list orchestration (load lifecycle + filters)
- infrastructure/: HTTP client, configuration, logging
- scripts/: Command line entry points
- tests/: Test suite
"""

__version__ = "1.0.0"
