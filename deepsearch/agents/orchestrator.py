from __future__ import annotations

import asyncio
import random
import time
from typing import AsyncGenerator, Awaitable, Callable, Sequence

from loguru import logger

from deepsearch.config import settings
from deepsearch.models.events import ReportEvent
from deepsearch.models.schemas import ContentBlock
from deepsearch.models.stages import STAGES, Stage
from deepsearch.services import logger as log_service
from deepsearch.services import streaming
from deepsearch.services.synthesizer import source_for, synthesize
from deepsearch.tools import duckduckgo_search

SearchFn = Callable[..., Awaitable[list[duckduckgo_search.SearchResult]]]
SleepFn = Callable[[float], Awaitable[None]]


class ReportPipeline:
    """Runs the stage catalog against a topic, one stage at a time.

    Flow per stage:
      1. Announce the stage (progress event)
      2. Best-effort retrieval with the stage's rendered query
      3. Synthesize the stage's content block
      4. Pace the stream so results arrive at a readable cadence
      5. Yield the block (result event)

    A single terminal event (complete or failure) closes the stream.
    """

    def __init__(
        self,
        stages: Sequence[Stage] = STAGES,
        *,
        search_enabled: bool | None = None,
        pacing_ms: tuple[int, int] | None = None,
        search_max_results: int | None = None,
        search: SearchFn | None = None,
        sleep: SleepFn | None = None,
        rng: random.Random | None = None,
    ):
        self.stages = tuple(stages)
        self.search_enabled = (
            bool(settings.search_enabled) if search_enabled is None else search_enabled
        )
        low, high = pacing_ms if pacing_ms is not None else (
            int(settings.pacing_min_ms),
            int(settings.pacing_max_ms),
        )
        low = max(low, 0)
        self.pacing_ms = (low, max(high, low))
        if search_max_results is None:
            search_max_results = int(settings.search_max_results)
        self.search_max_results = max(search_max_results, 1)
        self._search = search or duckduckgo_search.search
        self._sleep = sleep or asyncio.sleep
        self._rng = rng or random.Random()

    async def run(self, topic: str) -> AsyncGenerator[ReportEvent, None]:
        """Execute every stage for `topic`, yielding report events as they happen."""
        topic = (topic or "").strip()
        if not topic:
            log_service.log_event(
                event_type="report_rejected",
                message="Empty topic",
                error="topic must not be empty",
            )
            yield streaming.failure("Topic must not be empty.")
            return

        started_at = time.monotonic()
        total = len(self.stages)
        logger.info(f"Starting report for topic: {topic[:100]} ({total} stages)")

        try:
            for index, stage in enumerate(self.stages):
                label = stage.perspective_label
                yield streaming.progress(f"Searching: {label} ({index + 1}/{total})...")

                log_service.log_stage(topic, index, label, "running")
                await self._fetch_context(stage.render_query(topic))

                content = synthesize(topic, stage)
                await self._pace()

                block = ContentBlock(title=label, content=content, source=source_for(stage))
                log_service.log_stage(topic, index, label, "completed")
                yield streaming.result(block)

            runtime_ms = int((time.monotonic() - started_at) * 1000)
            logger.info(f"Report complete for topic: {topic[:100]} in {runtime_ms}ms")
            yield streaming.complete()

        except (asyncio.CancelledError, GeneratorExit):
            log_service.log_event(
                event_type="report_cancelled",
                message="Consumer stopped reading the report stream",
                topic=topic[:100],
            )
            raise
        except Exception as e:
            logger.exception(f"Report failed with error: {e}")
            yield streaming.failure(f"Report generation failed: {e}")

    async def _fetch_context(self, query: str) -> None:
        """Query the retrieval collaborator; failures and results never affect the stage."""
        if not self.search_enabled:
            return
        try:
            results = await self._search(query, max_results=self.search_max_results)
        except Exception as e:
            logger.warning(f"Search failed for '{query[:100]}': {e}")
            return
        if not results:
            logger.debug(f"Search returned no results for '{query[:100]}'")
            return
        # Retrieved context is advisory only and is not fed into synthesis.
        logger.debug(
            f"Search returned {len(results)} results for '{query[:100]}': "
            f"{duckduckgo_search.results_to_dicts(results)}"
        )

    async def _pace(self) -> None:
        low, high = self.pacing_ms
        if high <= 0:
            return
        await self._sleep(self._rng.uniform(low, high) / 1000)
