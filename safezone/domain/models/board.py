from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from .base import ApiModel

Category = Literal["free", "inquiry", "report"]
SearchType = Literal["title", "content", "title_content", "author"]


class Author(ApiModel):
    id: int
    nickname: str = ""


class CommentCount(ApiModel):
    comments: int = 0


class Post(ApiModel):
    id: int
    title: str
    content: str
    category: Category
    user_id: Optional[int] = None
    author_user: Optional[Author] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    count: Optional[CommentCount] = Field(default=None, alias="_count")


class Comment(ApiModel):
    id: int
    bord_id: Optional[int] = None
    user_id: Optional[int] = None
    content: str
    parent_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    author_user: Optional[Author] = None
    replies: List["Comment"] = Field(default_factory=list)


class PostDetail(Post):
    comments: List[Comment] = Field(default_factory=list)


class PostPage(ApiModel):
    posts: List[Post] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 10


class PostListParams(ApiModel):
    page: Optional[int] = None
    page_size: Optional[int] = None
    category: Optional[Category] = None
    search_type: Optional[SearchType] = None
    keyword: Optional[str] = None


class CreatePostRequest(ApiModel):
    title: str
    content: str
    category: Category


class UpdatePostRequest(ApiModel):
    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[Category] = None


class CreateCommentRequest(ApiModel):
    content: str
    parent_id: Optional[int] = None


class UpdateCommentRequest(ApiModel):
    content: str


Comment.model_rebuild()
PostDetail.model_rebuild()
