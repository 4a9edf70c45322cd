"""Domain layer DI providers."""

from dishka import Scope, provide

from discuss.config import AuthSettings, CommentSettings
from discuss.domain.repository import (
    ArticleRepository,
    CommentRepository,
    UserRepository,
)
from discuss.domain.service import (
    ArticleService,
    CommentService,
    JWTService,
    ThreadService,
    UserService,
    VisibilityFilter,
)
from discuss.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_article_service(
        self, article_repository: ArticleRepository
    ) -> ArticleService:
        """Provide article domain service."""
        return ArticleService(article_repository=article_repository)

    @provide
    def get_user_service(
        self, user_repository: UserRepository, comment_settings: CommentSettings
    ) -> UserService:
        """Provide user domain service."""
        return UserService(
            user_repository=user_repository, comment_settings=comment_settings
        )

    @provide
    def get_visibility_filter(
        self,
        article_service: ArticleService,
        comment_repository: CommentRepository,
    ) -> VisibilityFilter:
        """Provide comment visibility filter."""
        return VisibilityFilter(
            article_service=article_service, comment_repository=comment_repository
        )

    @provide
    def get_thread_service(
        self, visibility_filter: VisibilityFilter, comment_settings: CommentSettings
    ) -> ThreadService:
        """Provide thread read service."""
        return ThreadService(
            visibility_filter=visibility_filter, comment_settings=comment_settings
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        article_service: ArticleService,
        comment_settings: CommentSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            article_service=article_service,
            comment_settings=comment_settings,
        )
