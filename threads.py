import logging
from dataclasses import dataclass, field
from typing import Optional
from config import STRICT_ID_MATCHING
from exceptions import CommentNotFoundError, ThreadNotFoundError
from posts import Post

logger = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class Thread:
    parent: Post
    children: list[Post] = field(default_factory=list)

    def __str__(self) -> str:
        return f"Thread {self.thread_id}: {len(self.children)} in chain"

    @property
    def thread_id(self) -> str:
        return self.parent.post_hash_hex

    @property
    def last_child(self) -> Optional[Post]:
        return self.children[-1] if self.children else None

    def index_of(self, post_hash_hex: str) -> int:
        """Position of a post in the chain, or -1 when it is not rendered there."""
        for index, child in enumerate(self.children):
            if child.post_hash_hex == post_hash_hex:
                return index
        return -1

    def find_post(self, post_hash_hex: str) -> Optional[Post]:
        """Return the live parent or chain element with this id."""
        if self.parent.post_hash_hex == post_hash_hex:
            return self.parent
        index = self.index_of(post_hash_hex)
        return self.children[index] if index >= 0 else None


def flatten_thread(parent: Post) -> Thread:
    """
    Collapse a reply tree into a linear thread.

    Every direct reply of ``parent`` starts a chain that follows only the
    first reply at each nesting level; the chains are concatenated in reply
    order. ``parent`` and its descendants are not modified.
    """
    thread = Thread(parent)
    if not isinstance(parent.comments, list):
        return thread

    for comment in parent.comments:
        node = comment
        while node is not None:
            thread.children.append(node)
            node = node.first_comment()
    return thread


class ThreadManager:
    """
    Keeps the flattened threads of one root post, keyed by the id of each
    first-level reply.

    Posts whose counts change are replaced by copies rather than modified,
    and the thread parent is re-copied on every reply, so a renderer comparing
    object identity sees every change. ``threads`` hands out a cached list
    that is rebuilt only after a mutation; ``version`` moves with it.
    """

    def __init__(self, root_post: Post, strict: bool = STRICT_ID_MATCHING) -> None:
        self.root_id = root_post.post_hash_hex
        self.strict = strict
        self.version: int = 0
        self._thread_map: dict[str, Thread] = {}
        self._thread_cache: Optional[list[Thread]] = None
        self.add_threads(root_post.comments)
        logger.debug("Loaded %d threads for root %s", self.thread_count, self.root_id)

    @property
    def thread_count(self) -> int:
        return len(self._thread_map)

    @property
    def threads(self) -> list[Thread]:
        if self._thread_cache is None:
            self._thread_cache = list(self._thread_map.values())
        return self._thread_cache

    def _invalidate(self) -> None:
        self._thread_cache = None
        self.version += 1

    def _require_thread(self, thread_id: str) -> Thread:
        thread = self._thread_map.get(thread_id)
        if thread is None:
            raise ThreadNotFoundError(thread_id)
        return thread

    def get_thread(self, thread_id: str) -> Optional[Thread]:
        return self._thread_map.get(thread_id)

    def remove_thread(self, thread_id: str) -> None:
        self._invalidate()
        self._thread_map.pop(thread_id, None)

    def add_threads(self, comments: Optional[list[Post]]) -> None:
        """Register one thread per comment, keeping their order."""
        if not isinstance(comments, list):
            return
        for comment in comments:
            self.append_comment(comment)

    def prepend_comment(self, comment: Post) -> None:
        """Register a comment's thread ahead of every existing thread."""
        thread_map = {comment.post_hash_hex: flatten_thread(comment)}
        for thread_id, thread in self._thread_map.items():
            if thread_id != comment.post_hash_hex:
                thread_map[thread_id] = thread

        self._invalidate()
        self._thread_map = thread_map
        logger.debug("Prepended thread %s to root %s", comment.post_hash_hex, self.root_id)

    def append_comment(self, comment: Post) -> None:
        """Register a comment's thread last; a known id keeps its position."""
        self._invalidate()
        self._thread_map[comment.post_hash_hex] = flatten_thread(comment)

    def add_reply_to_comment(self, thread_id: str, replying_to: Post, reply: Post) -> None:
        """
        Record a new reply in a thread, roughly the way twitter threads behave.

        1. Replying to a thread parent with no chain starts the chain with the
           reply.
        2. Replying to the last post of the chain bumps its count and renders
           the reply as the new last post.
        3. Replying to a thread parent that already has a chain only bumps the
           parent's count.
        4. Replying to a post in the middle of the chain only bumps that post's
           count.

        Only case 1 and 2 render the reply.
        """
        thread = self._require_thread(thread_id)
        target_id = replying_to.post_hash_hex
        last_child = thread.last_child

        if target_id == thread_id and last_child is None:
            thread.parent = thread.parent.with_comment_count(1)
            thread.children = [reply]
        elif last_child is not None and target_id == last_child.post_hash_hex:
            thread.parent = thread.parent.copy()
            thread.children = thread.children[:-1] + [last_child.with_comment_count(1), reply]
        elif target_id == thread_id:
            thread.parent = thread.parent.with_comment_count(1)
        else:
            index = thread.index_of(target_id)
            if index < 0:
                if self.strict:
                    raise CommentNotFoundError(thread_id, target_id)
                logger.warning("Reply target %s is not in thread %s; counts unchanged", target_id, thread_id)
                return
            children = list(thread.children)
            children[index] = children[index].with_comment_count(1)
            thread.parent = thread.parent.copy()
            thread.children = children

        self._invalidate()

    def hide_comment(self, comment_to_hide: Post, parent_comment: Post, thread_id: str) -> None:
        """Flag a comment as hidden and decrement the reply count of its parent."""
        thread = self._require_thread(thread_id)
        parent_id = parent_comment.post_hash_hex
        index = -1
        if parent_id != thread_id:
            index = thread.index_of(parent_id)
            if index < 0 and self.strict:
                raise CommentNotFoundError(thread_id, parent_id)

        comment_to_hide.is_hidden = True
        if parent_id == thread_id:
            thread.parent = thread.parent.with_comment_count(-1)
        elif index >= 0:
            children = list(thread.children)
            children[index] = children[index].with_comment_count(-1)
            thread.children = children
        else:
            logger.warning("Parent %s of hidden comment is not in thread %s; counts unchanged",
                           parent_id, thread_id)

        self._invalidate()

    def reset(self) -> None:
        """Drop every thread."""
        self._thread_map = {}
        self._invalidate()
