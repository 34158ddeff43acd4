"""Publisher — generates decision documents and hands them to the storage layer."""

from __future__ import annotations

import logging
from pathlib import Path

import anyio
from pydantic import BaseModel, Field

from diavgeia.config import PublisherConfig
from diavgeia.exceptions import LoaderError, PublishError
from diavgeia.models.decision import DecisionRecord
from diavgeia.models.index import DecisionIndexEntry, ErrorEntry, append_error, append_index_entry
from diavgeia.n3.document import N3Document
from diavgeia.n3.generator import generate_n3
from diavgeia.n3.municipalities import load_municipalities
from diavgeia.output.loader import run_loader
from diavgeia.output.storage import remove_uncompressed, write_decision_file

log = logging.getLogger(__name__)

_RETRY_DELAY_SECONDS = 2.0


class PublishResult(BaseModel):
    """Outcome of publishing one decision."""

    iun: str
    version: int | str
    archive_path: Path | None = Field(default=None, description="The .n3.gz file")
    loader_output: str | None = Field(
        default=None, description="Loader stdout; None when the loader was skipped"
    )
    warnings: list[str] = Field(default_factory=list)
    error: str | None = None
    retryable: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class Publisher:
    """Runs generation, indexing, storage and loading for decision records."""

    def __init__(self, config: PublisherConfig | None = None) -> None:
        self.config = config or PublisherConfig()
        self.municipalities = load_municipalities(self.config.municipalities_file)

    def generate(self, record: DecisionRecord, *, strict: bool = False) -> N3Document:
        return generate_n3(
            record,
            benchmark=self.config.benchmark,
            strict=strict,
            municipalities=self.municipalities,
        )

    async def publish(self, record: DecisionRecord, *, strict: bool = False) -> PublishResult:
        """Publish one decision.

        The document is generated in full before anything is written. The
        uncompressed file is removed once the loader is done with it, even
        when loading fails. Raises ``PublishError`` on storage or loader
        failure.
        """
        document = self.generate(record, strict=strict)

        append_index_entry(
            self.config.index_path,
            DecisionIndexEntry(iun=record.iun, version=record.version, title=record.title),
        )
        plain, compressed = await write_decision_file(
            document.text, self.config.decisions_dir, record.iun, record.version,
        )
        try:
            output = None
            if not self.config.benchmark:
                output = await self._load_with_retries(plain)
        finally:
            await remove_uncompressed(plain)

        return PublishResult(
            iun=record.iun,
            version=record.version,
            archive_path=compressed,
            loader_output=output,
            warnings=document.warnings,
        )

    async def _load_with_retries(self, path: Path) -> str:
        attempt = 0
        while True:
            try:
                return await run_loader(
                    self.config.loader_executable,
                    self.config.dataset_url,
                    self.config.graph,
                    path,
                    timeout=self.config.loader_timeout,
                )
            except LoaderError as exc:
                if not exc.retryable or attempt >= self.config.loader_retries:
                    raise
                attempt += 1
                log.warning("Loader attempt %d for %s failed: %s; retrying", attempt, path.name, exc)
                await anyio.sleep(_RETRY_DELAY_SECONDS * attempt)

    async def publish_many(
        self,
        records: list[DecisionRecord],
        *,
        strict: bool = False,
        parallel: bool = False,
    ) -> list[PublishResult]:
        """Publish every record, recording failures instead of stopping.

        Results keep the order of *records* in both modes.
        """
        results: list[PublishResult | None] = [None] * len(records)

        async def publish_one(i: int, record: DecisionRecord) -> None:
            results[i] = await self._publish_recorded(record, strict=strict)

        if parallel:
            async with anyio.create_task_group() as tg:
                for i, record in enumerate(records):
                    tg.start_soon(publish_one, i, record)
        else:
            for i, record in enumerate(records):
                await publish_one(i, record)

        return [r for r in results if r is not None]

    async def _publish_recorded(self, record: DecisionRecord, *, strict: bool) -> PublishResult:
        try:
            return await self.publish(record, strict=strict)
        except PublishError as exc:
            log.error("Publishing %s/%s failed: %s", record.iun, record.version, exc)
            append_error(
                self.config.errors_path,
                ErrorEntry.from_exception("publish", exc, iun=record.iun, version=record.version),
            )
            return PublishResult(
                iun=record.iun,
                version=record.version,
                error=str(exc),
                retryable=exc.retryable,
            )
