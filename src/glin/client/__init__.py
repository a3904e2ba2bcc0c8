# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Transport clients."""

from .base import Client
from .httpx_client import HttpxClient

__all__ = ["Client", "HttpxClient"]
