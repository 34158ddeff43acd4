"""Session runner — CLI entrypoint for publishing decision records."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

import anyio

from diavgeia.config import PublisherConfig
from diavgeia.models.decision import DecisionRecord
from diavgeia.publisher import Publisher, PublishResult

log = logging.getLogger(__name__)


def load_records(path: Path) -> list[DecisionRecord]:
    """Load decision records from a JSON file holding one object or a list."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, list):
        return [DecisionRecord.model_validate(d) for d in data]
    return [DecisionRecord.model_validate(data)]


def print_documents(publisher: Publisher, records: list[DecisionRecord], *, strict: bool) -> int:
    """Generate documents to stdout without touching the index, files or loader."""
    warnings = 0
    for record in records:
        document = publisher.generate(record, strict=strict)
        sys.stdout.write(document.text)
        for warning in document.warnings:
            print(f"  warning: {record.iun}/{record.version}: {warning}", file=sys.stderr)
        warnings += len(document.warnings)
    return warnings


def report(results: list[PublishResult]) -> int:
    """Print a summary and return the number of failed records."""
    failed = 0
    for result in results:
        if result.ok:
            print(f"  Published: {result.iun}/{result.version} -> {result.archive_path}")
            for warning in result.warnings:
                print(f"    warning: {warning}")
        else:
            failed += 1
            kind = "retryable" if result.retryable else "fatal"
            print(f"  FAILED ({kind}): {result.iun}/{result.version}: {result.error}")
    return failed


async def run_session(
    record_file: Path,
    config: PublisherConfig,
    strict: bool = False,
    parallel: bool = False,
) -> int:
    """Publish every record in *record_file*; return the number of failures."""
    print(f"Loading decisions from {record_file}...")
    records = load_records(record_file)
    print(f"  Found {len(records)} decision(s)")

    publisher = Publisher(config)
    results = await publisher.publish_many(records, strict=strict, parallel=parallel)

    print(f"\nPublished {sum(r.ok for r in results)}/{len(results)} decision(s).")
    return report(results)


def main() -> None:
    """CLI entrypoint."""
    parser = argparse.ArgumentParser(description="Serialize Diavgeia decisions to N3 and publish them")
    parser.add_argument(
        "--record-file",
        type=Path,
        required=True,
        help="Path to JSON file with one decision record or a list of them",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the generated .n3.gz files",
    )
    parser.add_argument(
        "--benchmark",
        action="store_true",
        help="Leave out type-specific and auxiliary content and skip the loader",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Warn about references to entities the document does not define",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated documents instead of publishing them",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Publish records concurrently",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable verbose (debug) logging",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    config = PublisherConfig(benchmark=args.benchmark)
    if args.output_dir is not None:
        config = replace(config, decisions_dir=args.output_dir)

    try:
        if args.dry_run:
            print_documents(Publisher(config), load_records(args.record_file), strict=args.strict)
            return
        failed = anyio.run(run_session, args.record_file, config, args.strict, args.parallel)
    except KeyboardInterrupt:
        print("\nSession interrupted.")
        sys.exit(1)
    except (OSError, ValueError):
        log.exception("Could not process %s", args.record_file)
        sys.exit(1)

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
