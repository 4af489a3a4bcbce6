from dataclasses import dataclass, replace
from typing import Optional


@dataclass(slots=True, eq=False)
class Post:
    post_hash_hex: str
    comments: Optional[list["Post"]] = None
    comment_count: int = 0
    is_hidden: bool = False

    def __str__(self) -> str:
        hidden_marker = " [HIDDEN]" if self.is_hidden else ""
        return f"Post {self.post_hash_hex}: {self.comment_count} replies{hidden_marker}"

    def copy(self) -> "Post":
        """Shallow copy: a new object sharing the same comment list."""
        return replace(self)

    def with_comment_count(self, delta: int) -> "Post":
        """Return a shallow copy whose comment count is moved by ``delta``, floored at zero."""
        return replace(self, comment_count=max(self.comment_count + delta, 0))

    def first_comment(self) -> Optional["Post"]:
        if isinstance(self.comments, list) and self.comments:
            return self.comments[0]
        return None


def new_reply(post_hash_hex: str) -> Post:
    """Create the post a data source hands over for a freshly submitted reply."""
    return Post(post_hash_hex, comments=None, comment_count=0, is_hidden=False)
