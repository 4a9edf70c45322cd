"""Shared in-memory backing store.

Repositories are request-scoped, so the rows live here to survive across
requests for as long as the container does.
"""

from dataclasses import dataclass, field

from discuss.domain.model import Article, Comment, User
from discuss.domain.value import ArticleId, CommentId, UserId


@dataclass
class InMemoryStore:
    """Rows for every in-memory repository, keyed by id."""

    articles: dict[ArticleId, Article] = field(default_factory=dict)
    users: dict[UserId, User] = field(default_factory=dict)
    comments: dict[CommentId, Comment] = field(default_factory=dict)

    def add_article(self, article: Article) -> Article:
        self.articles[article.id] = article
        return article

    def add_user(self, user: User) -> User:
        self.users[user.id] = user
        return user

    def add_comment(self, comment: Comment) -> Comment:
        """Insert a comment row directly, bypassing the mutation policy."""
        self.comments[comment.id] = comment
        return comment
