"""Sequential chain execution."""

from __future__ import annotations

import json
import logging
from contextlib import aclosing, asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Callable, Optional, Sequence

import httpx

from api_chain.errors import ChainBusyError, DecodeError, HttpStatusError, NetworkError, StepConfigError, StepError
from api_chain.models.chain_run import ChainRun, ChainStatus
from api_chain.models.executor_settings import ExecutorSettings
from api_chain.models.step import GetCommentsStep, GetStep, PostStep, Step
from api_chain.models.step_outcome import StepFailed, StepOutcome, StepSucceeded
from api_chain.substitution import substitute_body, substitute_url

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class ResolvedRequest:
    method: str
    url: str
    body: Optional[dict[str, Any]] = None


def comments_url(settings: ExecutorSettings, related_id: str) -> str:
    try:
        url = httpx.URL(settings.comments_endpoint).copy_merge_params({"postId": related_id})
    except httpx.InvalidURL as exc:
        raise StepConfigError(f"Invalid comments endpoint {settings.comments_endpoint!r}: {exc}") from exc
    return str(url)


def resolve_request(step: Step, last_response: Any, settings: ExecutorSettings) -> ResolvedRequest:
    """Build the concrete request for ``step``.

    ``last_response`` is the previous step's decoded result, or ``None`` when
    there is nothing to substitute from.
    """
    substitute = step.use_last_response and last_response is not None
    if isinstance(step, GetCommentsStep):
        if not step.related_id:
            raise StepConfigError("Comments step requires a post id.")
        # Comments URLs are derived from the post id only and never templated.
        return ResolvedRequest(method="GET", url=comments_url(settings, step.related_id))
    if isinstance(step, PostStep):
        url = step.url
        body = step.body
        if substitute:
            url = substitute_url(url, last_response)
            if body is not None:
                body = substitute_body(body, last_response)
        return ResolvedRequest(method="POST", url=url, body=body)
    if isinstance(step, GetStep):
        url = substitute_url(step.url, last_response) if substitute else step.url
        return ResolvedRequest(method="GET", url=url)
    raise NotImplementedError(f"Unknown step kind: {getattr(step, 'kind', type(step).__name__)}")


def encode_body(body: Optional[dict[str, Any]]) -> Optional[bytes]:
    if body is None:
        return None
    try:
        return json.dumps(body).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise StepConfigError(f"Request body is not JSON serializable: {exc}") from exc


def build_http_client(settings: ExecutorSettings) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.timeout, follow_redirects=True)


class ChainExecutor:
    """Runs a chain of steps one at a time, halting on the first failure.

    Each step's outcome is written onto the step and also yielded from
    :meth:`stream`. The executor drives one chain at a time; starting a run
    while another is in progress raises :class:`ChainBusyError`.
    """

    def __init__(
        self,
        settings: ExecutorSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings: ExecutorSettings = settings or ExecutorSettings()
        self._http_client: httpx.AsyncClient | None = http_client
        self._running: bool = False
        self._status: ChainStatus = ChainStatus.IDLE

    @property
    def running(self) -> bool:
        return self._running

    @property
    def status(self) -> ChainStatus:
        return self._status

    async def run(
        self,
        steps: Sequence[Step],
        on_outcome: Callable[[StepOutcome], None] | None = None,
    ) -> ChainRun:
        outcomes: list[StepOutcome] = []
        async with aclosing(self.stream(steps)) as events:
            async for outcome in events:
                outcomes.append(outcome)
                if on_outcome is not None:
                    on_outcome(outcome)
        return ChainRun(status=self._status, outcomes=outcomes)

    async def stream(self, steps: Sequence[Step]) -> AsyncIterator[StepOutcome]:
        """Run ``steps`` from the first, yielding each outcome after it is recorded.

        The next step starts only when the consumer asks for the next outcome.
        Closing the stream early ends the run as halted.
        """
        if self._running:
            raise ChainBusyError("A chain run is already in progress.")
        if not steps:
            self._status = ChainStatus.COMPLETED
            return
        self._running = True
        self._status = ChainStatus.RUNNING
        logger.info("Starting chain run with %d steps", len(steps))
        try:
            async with self._client() as client:
                last_response: Any = None
                for index, step in enumerate(steps):
                    outcome = await self._attempt(client, index, step, last_response)
                    step.outcome = outcome
                    if isinstance(outcome, StepFailed):
                        self._status = ChainStatus.HALTED
                        logger.warning("Chain halted at step %d: %s", index + 1, outcome.failure)
                    else:
                        last_response = outcome.result
                        # The caller may edit the list mid-run; check its current length.
                        if index == len(steps) - 1:
                            self._status = ChainStatus.COMPLETED
                    yield outcome
                    if self._status == ChainStatus.HALTED:
                        return
            self._status = ChainStatus.COMPLETED
            logger.info("Chain run completed")
        finally:
            if self._status == ChainStatus.RUNNING:
                logger.warning("Chain run abandoned before completion")
                self._status = ChainStatus.HALTED
            self._running = False

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with build_http_client(self.settings) as client:
            yield client

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        index: int,
        step: Step,
        last_response: Any,
    ) -> StepOutcome:
        try:
            request = resolve_request(step, last_response, self.settings)
            logger.info("Step %d: %s %s", index + 1, request.method, request.url)
            result = await self._send(client, request)
        except StepError as exc:
            return StepFailed(step_id=step.id, index=index, failure=str(exc))
        return StepSucceeded(step_id=step.id, index=index, result=result)

    async def _send(self, client: httpx.AsyncClient, request: ResolvedRequest) -> Any:
        content = encode_body(request.body) if request.method == "POST" else None
        try:
            response = await client.request(
                request.method,
                request.url,
                headers=JSON_HEADERS,
                content=content,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NetworkError(f"Network error: {str(exc) or type(exc).__name__}") from exc
        if not response.is_success:
            raise HttpStatusError(response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"Invalid JSON response: {exc}") from exc
