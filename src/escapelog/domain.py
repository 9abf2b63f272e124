"""Escape Log bounded context: escape-room theme reviews.

Owns the Review aggregate (CQRS, single author) and the commands that record,
revise and delete reviews. Scoring, filtering and view-state logic live in
plain modules alongside the domain and never touch the store.
"""

import structlog
from protean.domain import Domain

escapelog = Domain(name="escapelog")

logger = structlog.get_logger(__name__)
