# core/viewer/catalog.py
"""Session cache of modules and their topic lists.

Topic lists are fetched at most once per module and kept for the rest of
the session. Concurrent requests for the same module share one fetch.
"""

import asyncio
import logging
from types import MappingProxyType
from typing import Mapping

import sentry_sdk

from core.lms.client import LMSClient
from core.lms.errors import AuthenticationError, LMSAPIError
from core.resources.types import Module, Topic

logger = logging.getLogger(__name__)


class TopicCatalog:
    """Modules of the signed-in user plus lazily loaded topic lists."""

    def __init__(self, client: LMSClient):
        self._client = client
        self._modules: tuple[Module, ...] = ()
        self._topics: Mapping[int, tuple[Topic, ...]] = MappingProxyType({})
        self._in_flight: dict[int, asyncio.Task] = {}
        self.modules_failed = False
        self.failed_modules: frozenset[int] = frozenset()

    @property
    def modules(self) -> list[Module]:
        return list(self._modules)

    async def load_modules(self, limit: int = 100, skip: int = 0) -> list[Module]:
        """
        Fetch the user's modules ordered by order_index.

        A backend failure yields an empty list and sets modules_failed so the
        UI can show a "could not load" message. Auth failures propagate.
        """
        try:
            modules = await self._client.list_modules(limit=limit, skip=skip)
        except AuthenticationError:
            raise
        except LMSAPIError as e:
            logger.error(f"Failed to load modules: {e}")
            sentry_sdk.capture_exception(e)
            self.modules_failed = True
            return []

        self.modules_failed = False
        self._modules = tuple(sorted(modules, key=lambda m: m.order_index))
        return list(self._modules)

    def cached(self, module_id: int) -> list[Topic] | None:
        """Topic list for a module if it has been loaded, else None."""
        topics = self._topics.get(module_id)
        return list(topics) if topics is not None else None

    async def get_topics(self, module_id: int) -> list[Topic]:
        """
        Topics of a module ordered by order_index, from cache when possible.

        Failures return an empty list, mark the module in failed_modules and
        are not cached, so a later call retries.
        """
        topics = self._topics.get(module_id)
        if topics is not None:
            return list(topics)

        task = self._in_flight.get(module_id)
        if task is None:
            task = asyncio.ensure_future(self._fetch_topics(module_id))
            self._in_flight[module_id] = task
            task.add_done_callback(lambda _t: self._in_flight.pop(module_id, None))

        return list(await asyncio.shield(task))

    async def _fetch_topics(self, module_id: int) -> tuple[Topic, ...]:
        try:
            topics = await self._client.list_topics(module_id)
        except AuthenticationError:
            raise
        except LMSAPIError as e:
            logger.error(f"Failed to load topics for module {module_id}: {e}")
            sentry_sdk.capture_exception(e)
            self.failed_modules = self.failed_modules | {module_id}
            return ()

        ordered = tuple(sorted(topics, key=lambda t: t.order_index))
        self._topics = MappingProxyType({**self._topics, module_id: ordered})
        self.failed_modules = self.failed_modules - {module_id}
        return ordered

    def clear(self) -> None:
        """Forget everything, e.g. on logout."""
        self._modules = ()
        self._topics = MappingProxyType({})
        self.modules_failed = False
        self.failed_modules = frozenset()
