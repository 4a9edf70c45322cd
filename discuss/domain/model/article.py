"""Article reference.

Articles are owned by the publishing workflow. The discussion domain only
needs to know whether one exists and whether it is publicly visible.
"""

from datetime import datetime
from typing import Optional

from discuss.domain.model.common import DomainModel
from discuss.domain.value import ArticleId, PublicationStatus


class Article(DomainModel):
    """Minimal view of an article as seen by the comment subsystem."""

    id: ArticleId
    title: str
    status: PublicationStatus
    deleted_at: Optional[datetime] = None

    @property
    def is_published(self) -> bool:
        return self.status == PublicationStatus.PUBLISHED and self.deleted_at is None
