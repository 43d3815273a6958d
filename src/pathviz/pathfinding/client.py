"""Boundary adapter between the run lifecycle and a pathfinding service."""
from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor

from pathviz.errors import BackendUnavailable
from pathviz.pathfinding.contract import PathRequest, PathResponse, decode_response
from pathviz.pathfinding.service import LocalPathfindingService, PathfindingService

logger = logging.getLogger(__name__)


class PathfindingClient:
    """Marshals a PathRequest to the service off the input thread.

    ``request`` returns a Future resolving to a validated PathResponse, or failing
    with BackendUnavailable. The client does no search work itself.
    """

    def __init__(
        self,
        service: PathfindingService | None = None,
        *,
        executor: Executor | None = None,
    ) -> None:
        self.service = service or LocalPathfindingService()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="pathfinding"
        )

    def request(self, request: PathRequest) -> "Future[PathResponse]":
        try:
            return self._executor.submit(self._round_trip, request)
        except RuntimeError as exc:
            raise BackendUnavailable(f"Pathfinding executor unavailable: {exc}") from exc

    def _round_trip(self, request: PathRequest) -> PathResponse:
        payload = request.to_payload()
        try:
            raw = self.service.find_path(**payload)
        except BackendUnavailable:
            raise
        except Exception as exc:
            logger.warning("Pathfinding service failed: %s", exc)
            raise BackendUnavailable(str(exc) or type(exc).__name__) from exc
        return decode_response(raw, request)

    def shutdown(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)
