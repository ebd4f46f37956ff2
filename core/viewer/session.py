# core/viewer/session.py
"""Per-learner viewer state: layout, progress and topic cache."""

import logging

from core.config import Settings
from core.lms.client import LMSClient
from core.resources.renderer import resolve_topic
from core.resources.types import CompletionEvent, RenderDirective, ResourceType, Topic
from .catalog import TopicCatalog
from .progress import ProgressTracker
from .view_mode import ViewModeController

logger = logging.getLogger(__name__)


class TopicNotFoundError(Exception):
    """Raised when a topic is not part of the requested module."""
    pass


class ViewerSession:
    """Everything one learner's viewer needs, owned by the caller."""

    def __init__(self, client: LMSClient, settings: Settings):
        self.client = client
        self.settings = settings
        self.catalog = TopicCatalog(client)
        self.view = ViewModeController(self.catalog)
        self.progress = ProgressTracker()

    def resolve(self, topic: Topic) -> tuple[ResourceType, RenderDirective]:
        return resolve_topic(topic, self.settings)

    async def find_topic(self, module_id: int, topic_id: int) -> Topic:
        topics = await self.catalog.get_topics(module_id)
        for topic in topics:
            if topic.id == topic_id:
                return topic
        raise TopicNotFoundError(f"Topic {topic_id} not found in module {module_id}")

    async def open_topic(self, module_id: int, topic_id: int) -> tuple[Topic, ResourceType, RenderDirective]:
        """Select a topic and return how to render it."""
        topic = await self.find_topic(module_id, topic_id)
        self.view.select_topic(module_id, topic_id)
        classification, directive = self.resolve(topic)
        return topic, classification, directive

    async def report_event(self, module_id: int, topic_id: int, event: CompletionEvent) -> bool:
        """
        Record a viewer event for a topic.

        Marks the topic complete when the event is the directive's
        completion trigger. Returns True only the first time a topic is
        completed; repeated events are no-ops.
        """
        topic = await self.find_topic(module_id, topic_id)
        _classification, directive = self.resolve(topic)
        if directive.completion_event != event:
            return False

        newly_completed = self.progress.mark_complete(module_id, topic_id)
        if newly_completed:
            logger.info(f"Topic {topic_id} in module {module_id} completed via {event}")
        return newly_completed

    async def completion_ratio(self, module_id: int) -> int:
        topics = await self.catalog.get_topics(module_id)
        return self.progress.completion_ratio(module_id, topics)

    def navigate_away(self) -> None:
        """View mode is not kept across navigation; progress and cache are."""
        self.view.reset()

    def end(self) -> None:
        """Drop all session state, e.g. on logout."""
        self.view.reset()
        self.progress.reset()
        self.catalog.clear()
