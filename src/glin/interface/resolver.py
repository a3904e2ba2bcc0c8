# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Method resolution: select one call strategy and one URL fragment.

Resolution Contract:
1. Verb kinds are the registry's known kinds, in registration order,
   excluding the JSON body kind.
2. Body methods (JSON tag) need a verb tag; the strategy is the JSON one and
   the HTTP verb and path come from that verb tag.
3. Other methods use the first verb kind present on the method.
4. With ``strict=True`` two verb tags on one method are an error; with
   ``strict=False`` the first in registry order wins.

Resolution is a pure function of the descriptor and the registry snapshot.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from glin.errors import AmbiguousVerbTag, MissingVerbTag, NoRecognizedTag

from .annotations import JSON_KIND

if TYPE_CHECKING:
    from glin.call.registry import CallRegistry

    from .descriptor import MethodDescriptor


class Resolution(NamedTuple):
    """Outcome of resolving a method.

    Attributes:
        kind: Registry kind of the selected call strategy.
        path: URL fragment appended to the base URL.
        verb: HTTP verb carried by the method's verb tag.
    """

    kind: str
    path: str
    verb: str


def matching_kinds(descriptor: MethodDescriptor, registry: CallRegistry) -> list[str]:
    """Verb kinds present on the method, in registry order."""
    return [
        kind
        for kind in registry.known_kinds()
        if kind != JSON_KIND and descriptor.has_tag(kind)
    ]


def resolve(
    descriptor: MethodDescriptor, registry: CallRegistry, strict: bool = True
) -> Resolution:
    """Resolve a method descriptor to (kind, path, verb).

    Args:
        descriptor: Descriptor of the invoked method.
        registry: Registry whose kinds define what is recognized.
        strict: Reject methods carrying more than one verb tag.

    Returns:
        The Resolution.

    Raises:
        MissingVerbTag: Body tag without a verb tag.
        NoRecognizedTag: No verb tag known to the registry.
        AmbiguousVerbTag: Several verb tags and ``strict`` is set.
    """
    kinds = matching_kinds(descriptor, registry)

    if descriptor.body and not kinds:
        raise MissingVerbTag("JSON tag requires a verb tag", descriptor.qualname)
    if not kinds:
        raise NoRecognizedTag("cannot find a verb tag", descriptor.qualname)
    if strict and len(kinds) > 1:
        raise AmbiguousVerbTag(f"several verb tags: {', '.join(kinds)}", descriptor.qualname)

    verb = kinds[0]
    path = descriptor.tag_value(verb) or ""
    if descriptor.body:
        return Resolution(JSON_KIND, path, verb)
    return Resolution(verb, path, verb)


__all__ = ["Resolution", "matching_kinds", "resolve"]
