"""Application layer DI providers."""

from dishka import Scope, provide

from discuss.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
    UpdateCommentUseCase,
)
from discuss.config import CommentSettings
from discuss.domain.service import CommentService, ThreadService, UserService
from discuss.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self,
        thread_service: ThreadService,
        comment_service: CommentService,
        user_service: UserService,
        comment_settings: CommentSettings,
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            thread_service=thread_service,
            comment_service=comment_service,
            user_service=user_service,
            comment_settings=comment_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService, user_service: UserService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self, comment_service: CommentService, user_service: UserService
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(
            comment_service=comment_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService, user_service: UserService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service, user_service=user_service
        )
