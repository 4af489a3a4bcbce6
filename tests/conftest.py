import pytest

from posts import Post


@pytest.fixture
def root_post():
    """
    root -> t1 -> x -> y -> z
                     -> y2
         -> t2
         -> t3 -> u
    """
    z = Post("z")
    y = Post("y", [z], comment_count=1)
    x = Post("x", [y, Post("y2")], comment_count=2)
    t1 = Post("t1", [x], comment_count=1)
    t2 = Post("t2")
    t3 = Post("t3", [Post("u")], comment_count=1)
    return Post("root", [t1, t2, t3], comment_count=3)


@pytest.fixture
def root_payload():
    return {
        "PostHashHex": "root",
        "CommentCount": 2,
        "Comments": [
            {
                "PostHashHex": "t1",
                "CommentCount": 1,
                "Comments": [{"PostHashHex": "x", "CommentCount": 0, "Comments": None}],
            },
            {"PostHashHex": "t2", "CommentCount": 0, "Comments": None},
        ],
    }
