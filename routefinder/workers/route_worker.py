"""
Route worker for background itinerary searches.

The search engine has no interruption points of its own, so callers that
must stay responsive submit searches here and simply drop the result of a
request they no longer care about.
"""

import logging
import time
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from threading import Lock
from typing import Callable, Dict, List, Optional, Set

from ..core.interfaces.i_route_service import IRouteService
from ..core.models.criteria import Criterion
from ..core.models.itinerary import Itinerary


@dataclass
class RouteRequest:
    """Route search request."""
    start: str
    end: str
    criterion: Criterion = Criterion.TIME
    limit: int = 1
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)


@dataclass
class RouteResult:
    """Route search result."""
    routes: List[Itinerary]
    computation_time: float
    request_id: str
    criterion: Criterion
    error: Optional[str] = None

    @property
    def best(self) -> Optional[Itinerary]:
        return self.routes[0] if self.routes else None


class RouteWorker:
    """Runs route searches on a thread pool."""

    def __init__(self, route_service: IRouteService, max_workers: int = 2):
        self.route_service = route_service
        self._executor = ThreadPoolExecutor(max_workers=max_workers,
                                            thread_name_prefix="route-worker")
        self._pending: Dict[str, Future] = {}
        self._discarded: Set[str] = set()
        self._lock = Lock()
        self._route_calculations = 0
        self.logger = logging.getLogger(self.__class__.__name__)

    def submit(self, request: RouteRequest,
               callback: Optional[Callable[[RouteResult], None]] = None) -> Future:
        """
        Queue a search.

        Args:
            request: What to search for
            callback: Called with the RouteResult unless the request was cancelled

        Returns:
            Future resolving to a RouteResult
        """
        future = self._executor.submit(self._run, request)
        with self._lock:
            self._pending[request.request_id] = future

        def _done(completed: Future) -> None:
            with self._lock:
                self._pending.pop(request.request_id, None)
                discarded = request.request_id in self._discarded
                self._discarded.discard(request.request_id)
            if callback is not None and not discarded and not completed.cancelled():
                callback(completed.result())

        future.add_done_callback(_done)
        self.logger.debug(f"Submitted route request {request.request_id}")
        return future

    def cancel(self, request_id: str) -> bool:
        """
        Cancel a request.

        A request that has not started is removed from the queue. One that is
        already running completes in the background and its callback is skipped.
        """
        with self._lock:
            future = self._pending.pop(request_id, None)
            if future is None:
                return False
            # Still pending means its completion handler has not run yet
            self._discarded.add(request_id)

        if future.cancel():
            with self._lock:
                self._discarded.discard(request_id)
        else:
            self.logger.debug(f"Route request {request_id} already running, result will be discarded")
        return True

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    @property
    def route_calculations(self) -> int:
        return self._route_calculations

    def is_pending(self, request_id: str) -> bool:
        with self._lock:
            return request_id in self._pending

    def _run(self, request: RouteRequest) -> RouteResult:
        start_time = time.time()
        try:
            if request.limit <= 1:
                route = self.route_service.find_route(request.start, request.end, request.criterion)
                routes = [route] if route is not None else []
            else:
                routes = self.route_service.find_top_routes(
                    request.start, request.end, request.criterion, request.limit
                )
            error = None
        except Exception as e:
            self.logger.error(f"Route calculation error: {e}")
            routes, error = [], str(e)

        with self._lock:
            self._route_calculations += 1

        return RouteResult(
            routes=routes,
            computation_time=time.time() - start_time,
            request_id=request.request_id,
            criterion=request.criterion,
            error=error,
        )

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work and release the pool threads."""
        self.logger.info("Route worker shutting down")
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> 'RouteWorker':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.shutdown()
