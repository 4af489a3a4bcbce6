#!/usr/bin/env python3
import logging
from posts import Post, new_reply
from threads import ThreadManager


def print_threads(tm: ThreadManager) -> None:
    print(f"\n{tm.thread_count} threads (version {tm.version}):")
    for thread in tm.threads:
        print(f"  {thread.parent}")
        for child in thread.children:
            print(f"    - {child}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    # root -> a -> a1 -> a1x
    #                  -> a1y (dropped: below a, only the first reply per level is kept)
    #             -> a2
    #      -> b
    a1 = Post("a1", [Post("a1x"), Post("a1y")], comment_count=2)
    a = Post("a", [a1, Post("a2")], comment_count=2)
    b = Post("b")
    root = Post("root", [a, b], comment_count=2)

    tm = ThreadManager(root)
    print_threads(tm)

    # Reply to a thread parent with no chain: the reply starts the chain
    tm.add_reply_to_comment("b", tm.get_thread("b").parent, new_reply("b1"))
    # Reply to the end of a chain: rendered as the new last post
    tm.add_reply_to_comment("a", tm.get_thread("a").last_child, new_reply("a2r"))
    # Reply to the middle of a chain: count only
    tm.add_reply_to_comment("a", tm.get_thread("a").children[0], new_reply("a1z"))
    print_threads(tm)

    # Hide the last reply of thread a
    thread = tm.get_thread("a")
    tm.hide_comment(thread.children[-1], thread.children[-2], "a")
    print_threads(tm)

    # A new top level reply goes first
    tm.prepend_comment(new_reply("c"))
    print_threads(tm)

    tm.reset()
    print_threads(tm)
