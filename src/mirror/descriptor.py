"""Sidecar descriptor parsing.

A sidecar (.gdoc) is a small JSON payload naming a remote document:

    {"url": "https://docs.google.com/document/d/<id>/edit", "title": "Roadmap"}

"name" is accepted in place of "title". Parsing is tolerant: malformed JSON,
non-object payloads and non-string fields degrade to absent values instead of
raising.
"""

import json
import logging
from typing import Any, Optional

from .models import RemoteReferenceDescriptor, ResolvedReference

logger = logging.getLogger(__name__)


def _string_field(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def parse_descriptor(text: str) -> Optional[RemoteReferenceDescriptor]:
    """Parse sidecar text into a descriptor.

    Args:
        text: Raw sidecar file content

    Returns:
        The descriptor, or None if the payload is not a JSON object
    """
    try:
        data: Any = json.loads(text)
    except ValueError:
        return None

    if not isinstance(data, dict):
        return None

    return RemoteReferenceDescriptor(
        url=_string_field(data, 'url'),
        title=_string_field(data, 'title') or _string_field(data, 'name'),
    )


def resolve_descriptor(text: str, fallback_title: str) -> ResolvedReference:
    """Parse sidecar text and apply defaults for every absent field.

    Args:
        text: Raw sidecar file content
        fallback_title: Title used when the descriptor names none

    Returns:
        ResolvedReference with an empty url when absent and a non-empty title
        whenever fallback_title is non-empty

    Examples:
        >>> resolve_descriptor('{not json', 'Notes')
        ResolvedReference(url='', title='Notes')
    """
    descriptor = parse_descriptor(text)
    if descriptor is None:
        logger.debug(f"Malformed sidecar payload, using fallback title '{fallback_title}'")
        descriptor = RemoteReferenceDescriptor()

    return ResolvedReference(
        url=descriptor.url or '',
        title=descriptor.title or fallback_title,
    )
