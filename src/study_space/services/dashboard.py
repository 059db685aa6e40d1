from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .context import ServiceContext
from .doubts import is_recent

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DashboardService:
    context: ServiceContext

    def load_all(self, *, now: Optional[datetime] = None) -> dict:
        """Fetch every collection with the orderings the dashboard displays.

        Any failure propagates; collections loaded before the failing one keep
        their new contents.
        """

        reference = now or datetime.now(timezone.utc)
        ctx = self.context
        ctx.tasks.load()
        ctx.exams.load("date")
        ctx.doubts.load(keep=lambda doubt: is_recent(doubt, reference))
        ctx.subjects.load()
        ctx.profiles.load()
        ctx.problems.load()
        ctx.amendments.load("created_at", descending=True)
        ctx.challenge_history.load("created_at", descending=True)
        counts = {
            collection.name: len(collection)
            for collection in (
                ctx.tasks,
                ctx.exams,
                ctx.doubts,
                ctx.subjects,
                ctx.profiles,
                ctx.problems,
                ctx.amendments,
                ctx.challenge_history,
            )
        }
        logger.info("Dashboard loaded: %s", counts)
        return counts
