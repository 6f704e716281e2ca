"""Community board service (posts and comments).

The backend mounts posts under ``/bords``; the path is part of the wire
contract and is kept as-is.
"""

from typing import List, Optional

import structlog

from safezone.domain.models.board import (
    Comment,
    CreateCommentRequest,
    CreatePostRequest,
    Post,
    PostDetail,
    PostListParams,
    PostPage,
    UpdateCommentRequest,
    UpdatePostRequest,
)
from safezone.domain.services.refresh_coordinator import RefreshCoordinator
from safezone.domain.value_objects.api_request import ApiRequest

logger = structlog.get_logger(__name__)

POSTS_ENDPOINT = "/bords"
COMMENTS_ENDPOINT = "/comments"


class BoardService:
    def __init__(self, coordinator: RefreshCoordinator):
        self._coordinator = coordinator

    async def get_posts(self, params: Optional[PostListParams] = None) -> PostPage:
        """Lists posts; empty or missing fields fall back to page 1 of 10."""
        query = params.to_payload() if params else {}
        response = await self._coordinator.execute(ApiRequest(POSTS_ENDPOINT, params=query)) or {}
        return PostPage(
            posts=[Post.model_validate(item) for item in response.get("items") or []],
            total=response.get("totalCount") or 0,
            page=response.get("page") or 1,
            page_size=response.get("pageSize") or 10,
        )

    async def get_post(self, post_id: int) -> PostDetail:
        response = await self._coordinator.execute(ApiRequest(f"{POSTS_ENDPOINT}/{post_id}"))
        return PostDetail.model_validate(response)

    async def create_post(self, data: CreatePostRequest) -> Post:
        logger.info("post_create_requested", category=data.category)
        response = await self._coordinator.execute(
            ApiRequest(POSTS_ENDPOINT, method="POST", body=data.to_payload())
        )
        return Post.model_validate(response)

    async def update_post(self, post_id: int, data: UpdatePostRequest) -> Post:
        response = await self._coordinator.execute(
            ApiRequest(f"{POSTS_ENDPOINT}/{post_id}", method="PATCH", body=data.to_payload())
        )
        return Post.model_validate(response)

    async def delete_post(self, post_id: int) -> None:
        await self._coordinator.execute(ApiRequest(f"{POSTS_ENDPOINT}/{post_id}", method="DELETE"))

    async def get_comments(self, post_id: int) -> List[Comment]:
        post = await self.get_post(post_id)
        return post.comments

    async def create_comment(self, post_id: int, data: CreateCommentRequest) -> Comment:
        response = await self._coordinator.execute(
            ApiRequest(f"{COMMENTS_ENDPOINT}/{post_id}", method="POST", body=data.to_payload())
        )
        return Comment.model_validate(response)

    async def update_comment(self, comment_id: int, data: UpdateCommentRequest) -> Comment:
        response = await self._coordinator.execute(
            ApiRequest(f"{COMMENTS_ENDPOINT}/{comment_id}", method="PATCH", body=data.to_payload())
        )
        return Comment.model_validate(response)

    async def delete_comment(self, comment_id: int) -> None:
        await self._coordinator.execute(ApiRequest(f"{COMMENTS_ENDPOINT}/{comment_id}", method="DELETE"))
