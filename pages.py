import logging
from typing import Optional
from config import MAX_PAGES, STRICT_ID_MATCHING
from exceptions import PageLimitError, PageNotFoundError
from posts import Post
from threads import Thread, ThreadManager

logger = logging.getLogger(__name__)


class PageManager:
    """One ThreadManager per viewed root post."""

    def __init__(self, max_pages: int = MAX_PAGES, strict: bool = STRICT_ID_MATCHING) -> None:
        self.max_pages = max_pages
        self.strict = strict
        self.thread_managers: dict[str, ThreadManager] = {}

    def load_page(self, root_post: Post) -> ThreadManager:
        """Build the threads for a root post, replacing any earlier load of it."""
        root_id = root_post.post_hash_hex
        if root_id not in self.thread_managers and len(self.thread_managers) >= self.max_pages:
            raise PageLimitError(self.max_pages)
        tm = ThreadManager(root_post, strict=self.strict)
        self.thread_managers[root_id] = tm
        logger.info("Loaded page %s with %d threads", root_id, tm.thread_count)
        return tm

    def get_pages(self) -> list[str]:
        return list(self.thread_managers)

    def get_thread_manager(self, root_id: str) -> Optional[ThreadManager]:
        return self.thread_managers.get(root_id)

    def require_thread_manager(self, root_id: str) -> ThreadManager:
        tm = self.thread_managers.get(root_id)
        if tm is None:
            raise PageNotFoundError(root_id)
        return tm

    def reset_page(self, root_id: str) -> bool:
        tm = self.thread_managers.get(root_id)
        if tm:
            tm.reset()
            return True
        return False

    def close_page(self, root_id: str) -> bool:
        if root_id in self.thread_managers:
            del self.thread_managers[root_id]
            return True
        return False


def resolve_post(thread: Thread, post_id: str) -> Post:
    """The live post with this id in a thread, or a bare stand-in carrying only the id."""
    post = thread.find_post(post_id)
    if post is None:
        return Post(post_id)
    return post
