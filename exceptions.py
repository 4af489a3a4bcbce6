from fastapi import HTTPException, status


class ThreadViewError(Exception):
    """Base class for errors raised by the thread view."""


class ThreadNotFoundError(ThreadViewError):
    def __init__(self, thread_id: str) -> None:
        super().__init__(f"Thread {thread_id} is not registered")
        self.thread_id = thread_id


class CommentNotFoundError(ThreadViewError):
    def __init__(self, thread_id: str, post_hash_hex: str) -> None:
        super().__init__(f"Comment {post_hash_hex} is not part of thread {thread_id}")
        self.thread_id = thread_id
        self.post_hash_hex = post_hash_hex


class PageNotFoundError(ThreadViewError):
    def __init__(self, root_id: str) -> None:
        super().__init__(f"Page {root_id} is not loaded")
        self.root_id = root_id


class PageLimitError(ThreadViewError):
    def __init__(self, limit: int) -> None:
        super().__init__(f"Cannot load more than {limit} pages")
        self.limit = limit


class Exceptions:
    NOT_FOUND = HTTPException(status.HTTP_404_NOT_FOUND, "Resource not found")
    PAGE_NOT_FOUND = HTTPException(status.HTTP_404_NOT_FOUND, "Page not loaded")
    THREAD_NOT_FOUND = HTTPException(status.HTTP_404_NOT_FOUND, "Thread not found")
    COMMENT_NOT_FOUND = HTTPException(status.HTTP_404_NOT_FOUND, "Comment not found in thread")
    PAGE_LIMIT = HTTPException(status.HTTP_409_CONFLICT, "Too many pages loaded")
    ROOT_MISMATCH = HTTPException(status.HTTP_400_BAD_REQUEST, "Root post id does not match the page")
