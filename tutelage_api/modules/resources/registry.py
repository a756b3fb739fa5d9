"""Lookup of parent content resources by ``(resource_type, resource_id)``.

The registry is built once at startup (see ``build_default_registry``) and
injected into request handlers through ``get_resource_registry``. Adding a
content type is one ``register`` call.
"""

import logging
from collections.abc import Iterable
from enum import StrEnum
from typing import Any, Protocol

from fastapi import Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tutelage_api.core.database.base import BaseModel
from tutelage_api.modules.resources.models import (
    Audio,
    Blog,
    EslAudio,
    EslVideo,
    Reading,
    Speaking,
    Story,
    Video,
    Writing,
)

logger = logging.getLogger(__name__)

# Largest value a BIGINT primary key can hold
MAX_RESOURCE_ID = 2**63 - 1


class ResourceType(StrEnum):
    """Content types that accept task PDFs."""

    VIDEO = "video"
    AUDIO = "audio"
    SPEAKING = "speaking"
    WRITING = "writing"
    READING = "reading"
    STORY = "story"
    BLOG = "blog"
    ESL_VIDEO = "esl_video"
    ESL_AUDIO = "esl_audio"


class ResourceLookup(Protocol):
    """Storage accessor for one content type."""

    async def get(self, session: AsyncSession, resource_id: int) -> Any | None: ...

    async def existing_ids(self, session: AsyncSession, resource_ids: Iterable[int]) -> set[int]: ...


class ModelLookup:
    """Primary-key lookup against an ORM model's table."""

    def __init__(self, model: type[BaseModel]):
        self.model = model

    async def get(self, session: AsyncSession, resource_id: int) -> BaseModel | None:
        stmt = select(self.model).where(self.model.id == resource_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def existing_ids(self, session: AsyncSession, resource_ids: Iterable[int]) -> set[int]:
        ids = set(resource_ids)
        if not ids:
            return set()
        stmt = select(self.model.id).where(self.model.id.in_(ids))
        result = await session.execute(stmt)
        return set(result.scalars().all())

    def __repr__(self) -> str:
        return f"ModelLookup({self.model.__name__})"


def parse_resource_id(raw: Any) -> int | None:
    """Parse a path/body identifier into a non-negative int.

    Accepts ints and strings made only of ASCII digits (surrounding
    whitespace ignored). Returns None for anything else, including "12abc",
    "-1", "1.5" and booleans.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        text = raw.strip()
        if not text or not text.isascii() or not text.isdigit():
            return None
        value = int(text)
    else:
        return None
    if value < 0 or value > MAX_RESOURCE_ID:
        return None
    return value


def parse_resource_type(raw: Any) -> ResourceType | None:
    try:
        return ResourceType(raw)
    except ValueError:
        return None


class ResourceRegistry:
    """Maps each ``ResourceType`` to the lookup that owns its rows."""

    def __init__(self) -> None:
        self._lookups: dict[ResourceType, ResourceLookup] = {}

    def register(self, resource_type: ResourceType | str, lookup: ResourceLookup) -> "ResourceRegistry":
        self._lookups[ResourceType(resource_type)] = lookup
        return self

    @property
    def resource_types(self) -> list[ResourceType]:
        return list(self._lookups)

    def lookup_for(self, resource_type: Any) -> ResourceLookup | None:
        parsed = parse_resource_type(resource_type)
        if parsed is None:
            return None
        return self._lookups.get(parsed)

    async def resolve(
        self,
        session: AsyncSession,
        resource_type: Any,
        resource_id: Any,
    ) -> Any | None:
        """
        Return the parent resource, or None.

        None covers an unknown type, an unregistered type, a malformed id and
        a missing row alike. Storage is only queried once both identifiers
        are valid.
        """
        lookup = self.lookup_for(resource_type)
        parsed_id = parse_resource_id(resource_id)
        if lookup is None or parsed_id is None:
            logger.debug("Rejected resource identifiers type=%r id=%r", resource_type, resource_id)
            return None

        resource = await lookup.get(session, parsed_id)
        if resource is None:
            logger.debug("No %s with id=%s", resource_type, parsed_id)
        return resource


def build_default_registry() -> ResourceRegistry:
    """Registry of the nine content tables."""
    registry = ResourceRegistry()
    registry.register(ResourceType.VIDEO, ModelLookup(Video))
    registry.register(ResourceType.AUDIO, ModelLookup(Audio))
    registry.register(ResourceType.SPEAKING, ModelLookup(Speaking))
    registry.register(ResourceType.WRITING, ModelLookup(Writing))
    registry.register(ResourceType.READING, ModelLookup(Reading))
    registry.register(ResourceType.STORY, ModelLookup(Story))
    registry.register(ResourceType.BLOG, ModelLookup(Blog))
    registry.register(ResourceType.ESL_VIDEO, ModelLookup(EslVideo))
    registry.register(ResourceType.ESL_AUDIO, ModelLookup(EslAudio))
    return registry


def get_resource_registry(request: Request) -> ResourceRegistry:
    """Dependency returning the registry created at application startup."""
    return request.app.state.resource_registry
