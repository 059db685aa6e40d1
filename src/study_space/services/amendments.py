from __future__ import annotations

import logging
from dataclasses import dataclass

from ..domain import Amendment
from .context import ServiceContext

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AmendmentService:
    context: ServiceContext

    def list_amendments(self) -> list[Amendment]:
        return self.context.amendments.items

    def fetch_and_save(self, subject: str, topic: str) -> Amendment:
        if not subject.strip() or not topic.strip():
            raise ValueError("Both subject and topic are required.")
        summary = self.context.tutor.summarize_amendments(subject.strip(), topic.strip())
        amendment = self.context.amendments.create(
            subject=subject.strip(),
            topic=topic.strip(),
            summary={"points": list(summary.points)},
        )
        logger.info("Saved %d amendment points for %s / %s", len(summary.points), subject, topic)
        return amendment

    def delete(self, amendment_id: int) -> None:
        self.context.amendments.delete(amendment_id)
