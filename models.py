from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Literal
from posts import Post
from threads import Thread, ThreadManager


class PostPayload(BaseModel):
    """A comment tree node as the data source sends it."""
    model_config = ConfigDict(populate_by_name=True)

    post_hash_hex: str = Field(alias="PostHashHex", min_length=1)
    comments: Optional[List["PostPayload"]] = Field(default=None, alias="Comments")
    comment_count: int = Field(default=0, alias="CommentCount", ge=0)
    is_hidden: bool = Field(default=False, alias="IsHidden")

    def to_post(self) -> Post:
        comments = None
        if self.comments is not None:
            comments = [comment.to_post() for comment in self.comments]
        return Post(self.post_hash_hex, comments, self.comment_count, self.is_hidden)


class PostResponse(BaseModel):
    """A rendered post; nested comments are not echoed back."""
    model_config = ConfigDict(populate_by_name=True)

    post_hash_hex: str = Field(alias="PostHashHex")
    comment_count: int = Field(alias="CommentCount")
    is_hidden: bool = Field(alias="IsHidden")

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        return cls(post_hash_hex=post.post_hash_hex, comment_count=post.comment_count, is_hidden=post.is_hidden)


class ThreadResponse(BaseModel):
    parent: PostResponse
    children: List[PostResponse]

    @classmethod
    def from_thread(cls, thread: Thread) -> "ThreadResponse":
        return cls(parent=PostResponse.from_post(thread.parent),
                   children=[PostResponse.from_post(child) for child in thread.children])


class ThreadListResponse(BaseModel):
    root_id: str
    version: int
    thread_count: int
    threads: List[ThreadResponse]

    @classmethod
    def from_manager(cls, tm: ThreadManager) -> "ThreadListResponse":
        return cls(root_id=tm.root_id, version=tm.version, thread_count=tm.thread_count,
                   threads=[ThreadResponse.from_thread(thread) for thread in tm.threads])


class CommentAdd(BaseModel):
    comment: PostPayload
    position: Literal["first", "last"] = "last"


class ReplyCreate(BaseModel):
    replying_to: str = Field(min_length=1)
    reply: PostPayload

    @field_validator('reply')
    @classmethod
    def validate_reply(cls, v):
        if v.comments:
            raise ValueError('A new reply cannot carry nested comments')
        return v


class CommentHide(BaseModel):
    comment: str = Field(min_length=1)
    parent: str = Field(min_length=1)


class ErrorResponse(BaseModel):
    error: str
    message: str
