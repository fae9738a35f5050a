"""
Sequential batch processing on the caller's side.

The engine itself has no notion of batches. Downstream analysis services are
rate limited, so the runner waits ``delay_seconds`` between documents (never
after the last one). A failed document is recorded and the batch continues.
"""

import logging
import time
from pathlib import Path
from typing import Callable, Iterable, List, Union

from pydantic import BaseModel, Field

from app.core.engine import ResumeExtractionEngine
from app.core.schemas import ParseFailure, ParseResult, ParseSuccess, RawDocument


logger = logging.getLogger(__name__)

BatchInput = Union[RawDocument, str, Path]


class BatchReport(BaseModel):
    results: List[ParseResult] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> List[ParseSuccess]:
        return [r for r in self.results if isinstance(r, ParseSuccess)]

    @property
    def failed(self) -> List[ParseFailure]:
        return [r for r in self.results if isinstance(r, ParseFailure)]


class BatchRunner:

    def __init__(
        self,
        engine: ResumeExtractionEngine,
        delay_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.engine = engine
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    def _parse_one(self, document: BatchInput) -> ParseResult:
        if isinstance(document, RawDocument):
            return self.engine.parse(document)
        return self.engine.parse_file(document)

    def run(self, documents: Iterable[BatchInput]) -> BatchReport:
        """
        Parse ``documents`` one at a time, in order.

        Returns:
            BatchReport with one result per input, in input order.
        """
        report = BatchReport()
        for i, document in enumerate(documents):
            if i > 0 and self.delay_seconds > 0:
                self._sleep(self.delay_seconds)
            result = self._parse_one(document)
            if isinstance(result, ParseFailure):
                logger.info(f"Batch item {i} failed: {result.kind.value}")
            report.results.append(result)
        logger.info(f"Batch completed: {len(report.successful)}/{report.total} parsed")
        return report
