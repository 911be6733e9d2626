"""ORM Models - SQLAlchemy declarative models for persisted resources.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata knows every table before
      create_all runs
"""

from app.models.study import Study  # noqa: F401
