"""
Document to store synchronization.

This module handles syncing an incoming XLF document with the store:
- Detecting added, updated, unchanged and deactivated records
- Clearing translations whose source text changed
- Writing the next state back to the store
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Sequence

from xlf_translator import xliff
from xlf_translator.config import language_columns as get_language_columns
from xlf_translator.config import required_columns
from xlf_translator.core.models import Record, Segment, format_max_width
from xlf_translator.logger import get_logger
from xlf_translator.store.base import TabularStore

logger = get_logger(__name__)

# Change kinds, in the order they are reported
ADDED = "added"
UPDATED = "updated"
REFRESHED = "refreshed"  # metadata or liveness only, translations kept
DEACTIVATED = "deactivated"
CHANGE_KINDS = [ADDED, UPDATED, REFRESHED, DEACTIVATED]

SAMPLE_SIZE = 5


@dataclass
class SyncStats:
    """The four sync counters."""
    added: int = 0
    updated: int = 0
    unchanged: int = 0
    deactivated: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "added": self.added,
            "updated": self.updated,
            "unchanged": self.unchanged,
            "deactivated": self.deactivated,
        }

    def __str__(self):
        return (f"SyncStats(added={self.added}, "
                f"updated={self.updated}, "
                f"unchanged={self.unchanged}, "
                f"deactivated={self.deactivated})")


@dataclass
class RecordChange:
    """One record touched by a reconciliation."""
    kind: str
    id: str
    index: int  # position in the next record list
    old_source: Optional[str] = None
    new_source: Optional[str] = None


@dataclass
class ReconcileResult:
    """Next store state plus what changed to get there."""
    records: List[Record] = field(default_factory=list)
    stats: SyncStats = field(default_factory=SyncStats)
    changes: List[RecordChange] = field(default_factory=list)

    @property
    def new_records(self) -> List[Record]:
        return [self.records[change.index] for change in self.changes if change.kind == ADDED]

    @property
    def changed_rows(self) -> List[tuple]:
        """(row position, record) for every existing row that must be rewritten."""
        return [
            (change.index, self.records[change.index])
            for change in self.changes
            if change.kind != ADDED
        ]

    def changes_of(self, kind: str) -> List[RecordChange]:
        return [change for change in self.changes if change.kind == kind]


@dataclass
class SyncReport:
    """Outcome of one sync run."""
    stats: SyncStats
    total_segments: int
    strategy: str
    dry_run: bool = False
    changes: List[RecordChange] = field(default_factory=list)

    @property
    def message(self) -> str:
        prefix = "Sync preview" if self.dry_run else "Sync completed"
        return (f"{prefix}: {self.stats.added} added, {self.stats.updated} updated, "
                f"{self.stats.unchanged} unchanged, {self.stats.deactivated} deactivated")

    def samples(self, limit: int = SAMPLE_SIZE) -> List[Dict[str, Any]]:
        """A few changes of each kind, for previews."""
        samples = []
        for kind in CHANGE_KINDS:
            for change in [c for c in self.changes if c.kind == kind][:limit]:
                samples.append({
                    "type": kind,
                    "id": change.id,
                    "old_source": change.old_source,
                    "new_source": change.new_source,
                })
        return samples

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "stats": self.stats.to_dict(),
            "totalSegments": self.total_segments,
            "message": self.message,
            "dry_run": self.dry_run,
            "strategy": self.strategy,
            "samples": self.samples(),
        }


def _index_segments(segments: Iterable[Segment]) -> Dict[str, Segment]:
    """Index segments by id. Later duplicates win, segments without an id are skipped."""
    incoming: Dict[str, Segment] = {}
    for segment in segments:
        if not segment.id:
            logger.debug("Skipping segment without id")
            continue
        if segment.id in incoming:
            logger.debug(f"Duplicate segment id '{segment.id}', keeping the last one")
        incoming[segment.id] = segment
    return incoming


def _cleared_translations(record: Record, language_columns: Sequence[str]) -> Dict[str, str]:
    """Every translation cell the record has or the store defines, reset to empty."""
    columns = dict.fromkeys(list(record.translations) + list(language_columns))
    return {column: "" for column in columns}


def reconcile(segments: Iterable[Segment], records: Sequence[Record],
              language_columns: Sequence[str]) -> ReconcileResult:
    """
    Compute the next store state for an incoming set of segments.

    Existing records keep their position; new records are appended in
    document order. Records are never removed: ids missing from the
    document are only marked inactive. A changed source text clears every
    translation of that record. The inputs are not modified.

    Args:
        segments: Segments extracted from the incoming document
        records: Current store records, in store order
        language_columns: Language columns currently defined on the store

    Returns:
        ReconcileResult with the next records, the counters and a change log
    """
    incoming = _index_segments(segments)
    result = ReconcileResult()

    for record in records:
        index = len(result.records)

        if not record.id:
            # Rows without an id are not ours to manage
            result.records.append(record)
            continue

        segment = incoming.pop(record.id, None)

        if segment is None:
            if record.is_active:
                record = replace(record, active=False, translations=dict(record.translations))
                result.stats.deactivated += 1
                result.changes.append(RecordChange(DEACTIVATED, record.id, index))
            result.records.append(record)
            continue

        if record.source != segment.source:
            result.changes.append(RecordChange(
                UPDATED, record.id, index,
                old_source=record.source,
                new_source=segment.source,
            ))
            record = replace(
                record,
                source=segment.source,
                max_width=format_max_width(segment.max_width),
                size_unit=segment.size_unit,
                active=True,
                translations=_cleared_translations(record, language_columns),
            )
            result.stats.updated += 1
        elif not record.matches_metadata(segment) or not record.is_active:
            record = replace(
                record,
                max_width=format_max_width(segment.max_width),
                size_unit=segment.size_unit,
                active=True,
                translations=dict(record.translations),
            )
            result.stats.unchanged += 1
            result.changes.append(RecordChange(REFRESHED, record.id, index))
        else:
            result.stats.unchanged += 1

        result.records.append(record)

    for segment in incoming.values():
        index = len(result.records)
        result.records.append(Record.from_segment(segment, language_columns))
        result.stats.added += 1
        result.changes.append(RecordChange(ADDED, segment.id, index, new_source=segment.source))

    logger.info(f"Reconciliation complete: {result.stats}")
    return result


def apply_sync_changes(store: TabularStore, result: ReconcileResult, strategy: str = "rewrite"):
    """
    Write a reconciliation result to the store.

    Args:
        store: The store to write to
        result: The reconciliation result
        strategy: 'rewrite' replaces the whole table; 'targeted' rewrites
                  only changed rows and appends new ones
    """
    if strategy == "rewrite":
        logger.info(f"Rewriting store with {len(result.records)} records")
        store.replace_all(result.records)
    elif strategy == "targeted":
        changed_rows = result.changed_rows
        new_records = result.new_records
        logger.info(f"Updating {len(changed_rows)} rows and appending {len(new_records)} rows")
        if changed_rows:
            store.update_records(changed_rows)
        if new_records:
            store.append_records(new_records)
    else:
        raise ValueError(f"Unknown sync strategy: {strategy}")

    logger.info("Sync changes written to store")


def sync_document(content: bytes, store: TabularStore, config: Dict[str, Any],
                  dry_run: bool = False) -> SyncReport:
    """
    Synchronize an XLF document with the store.

    This function:
    1. Extracts segments from the document
    2. Makes sure the store has the base columns
    3. Reconciles the segments with the current records
    4. Writes the next state with the configured strategy (skipped on dry run)

    Args:
        content: Raw XLF document
        store: Store accessor
        config: Application configuration
        dry_run: Compute the changes without writing anything

    Returns:
        SyncReport with the counters and the change log

    Raises:
        MalformedDocument: If the document has no usable segments
        UnsupportedSourceLanguage: If the document's source language is not supported
        StoreUnavailable: If the store cannot be read or written
    """
    document = xliff.extract(content, source_language=config["source_language"])
    logger.info(f"Starting sync of {len(document.segments)} segments (dry_run={dry_run})")

    if not dry_run:
        store.ensure_columns(required_columns(config))

    columns = store.get_columns()
    records = store.get_all_records()
    language_columns = get_language_columns(columns, config)
    logger.debug(f"Store has {len(records)} records and {len(language_columns)} language columns")

    result = reconcile(document.segments, records, language_columns)
    strategy = config.get("sync_strategy", "rewrite")

    if not dry_run:
        apply_sync_changes(store, result, strategy)

    report = SyncReport(
        stats=result.stats,
        total_segments=len(document.segments),
        strategy=strategy,
        dry_run=dry_run,
        changes=result.changes,
    )
    logger.info(report.message)
    return report
