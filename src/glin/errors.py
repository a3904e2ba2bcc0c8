# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy for glin.

Resolution errors are programming errors in an interface definition. They
are raised synchronously when an interface method is invoked, never
deferred into the returned Call.

Hierarchy::

    GlinError
    ├── UnsupportedOperation
    │   ├── NoRecognizedTag
    │   ├── MissingVerbTag
    │   ├── AmbiguousVerbTag
    │   ├── ArityMismatch
    │   │   └── MissingParameterTag
    │   └── UnknownStrategy
    ├── IllegalConfigurationOrder
    ├── RegistryFrozenError
    ├── TransportError
    └── CallCanceled
"""

from __future__ import annotations


class GlinError(Exception):
    """Base class for all glin errors."""


class UnsupportedOperation(GlinError):
    """An interface method cannot be turned into a call."""

    def __init__(self, message: str, method: str | None = None):
        self.method = method
        if method:
            message = f"{method}: {message}"
        super().__init__(message)


class NoRecognizedTag(UnsupportedOperation):
    """Method carries no verb+path tag known to the registry."""


class MissingVerbTag(UnsupportedOperation):
    """Body tag present without an accompanying verb+path tag."""


class AmbiguousVerbTag(UnsupportedOperation):
    """More than one verb+path tag on a method (strict mode only)."""


class ArityMismatch(UnsupportedOperation):
    """Parameter tags and call arguments do not line up."""


class MissingParameterTag(ArityMismatch):
    """A non-body parameter has no Arg binding tag."""


class UnknownStrategy(UnsupportedOperation):
    """The resolved tag kind has no registered call constructor."""


class IllegalConfigurationOrder(GlinError):
    """A configuration method was invoked before its required predecessor."""


class RegistryFrozenError(GlinError):
    """Attempt to register a call type on a frozen registry."""


class TransportError(GlinError):
    """Network exchange failed before a response was received."""

    def __init__(self, message: str, url: str | None = None):
        self.url = url
        super().__init__(message)


class CallCanceled(GlinError):
    """Execution requested on a call that was canceled."""


__all__ = [
    "AmbiguousVerbTag",
    "ArityMismatch",
    "CallCanceled",
    "GlinError",
    "IllegalConfigurationOrder",
    "MissingParameterTag",
    "MissingVerbTag",
    "NoRecognizedTag",
    "RegistryFrozenError",
    "TransportError",
    "UnknownStrategy",
    "UnsupportedOperation",
]
