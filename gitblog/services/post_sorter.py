from typing import Iterable, List

from gitblog.schemas.blog import Post


def sort_posts(posts: Iterable[Post]) -> List[Post]:
    """Newest first; undated posts last; ties broken by slug."""
    by_slug = sorted(posts, key=lambda p: p.slug)
    dated = [p for p in by_slug if p.data.date]
    undated = [p for p in by_slug if not p.data.date]
    # reverse sorts stay stable, so equal dates keep slug order
    dated.sort(key=lambda p: p.data.date, reverse=True)
    return dated + undated


def series_sort_key(post: Post):
    order = post.data.order
    date = post.data.date
    return (
        order is None,
        order if order is not None else 0,
        not date,
        date or "",
        post.slug,
    )


def sort_series_posts(posts: Iterable[Post]) -> List[Post]:
    """Explicit `order` first, then oldest date, then slug."""
    return sorted(posts, key=series_sort_key)
