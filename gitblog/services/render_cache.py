import asyncio
import functools
import inspect
from typing import Any, Awaitable, Callable, Dict, Hashable


class RenderCache:
    """
    Memoizes coroutine results for the lifetime of one render pass.
    Identical calls share a single task, so in-flight work is not duplicated.
    """

    def __init__(self):
        self._tasks: Dict[Hashable, asyncio.Task] = {}

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._tasks

    async def get_or_run(
        self, key: Hashable, factory: Callable[[], Awaitable[Any]]
    ) -> Any:
        task = self._tasks.get(key)
        if task is None:
            task = asyncio.ensure_future(factory())
            self._tasks[key] = task
        return await asyncio.shield(task)

    def clear(self) -> None:
        self._tasks.clear()


def memoized(method):
    """Cache an async method in `self.cache`, keyed by name and bound arguments."""
    signature = inspect.signature(method)

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        bound = signature.bind(self, *args, **kwargs)
        bound.apply_defaults()
        arguments = tuple(bound.arguments.items())[1:]  # drop self
        key = (method.__qualname__, arguments)
        return await self.cache.get_or_run(key, lambda: method(self, *args, **kwargs))

    return wrapper
