from __future__ import annotations

import logging
from typing import Any, Awaitable, Dict

from rentdesk.clients.backend import BackendClient
from rentdesk.services.exceptions import ServiceError

logger = logging.getLogger(__name__)


class BackendService:
    """Shared plumbing for services that run against the mock store or the remote backend."""

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    @property
    def use_mock_data(self) -> bool:
        return self._client.use_mock_data

    async def _remote(self, action: str, call: Awaitable[Dict[str, Any]]) -> Dict[str, Any]:
        try:
            return await call
        except ServiceError:
            raise
        except Exception as exc:
            logger.exception("Unexpected error while trying to %s", action)
            raise ServiceError(f"Failed to {action}", cause=exc)
