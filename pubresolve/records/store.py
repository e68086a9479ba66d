"""Reading and updating the ``_publish.yml`` record file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from pubresolve.errors import RecordFileError
from pubresolve.records.models import PROJECT_SOURCE, PublishEntry, PublishRecord
from pubresolve.services import is_known_service, normalize_service_name

logger = logging.getLogger(__name__)

DEFAULT_RECORD_FILE = "_publish.yml"


def parse_records(raw: Any, path: Path | str = DEFAULT_RECORD_FILE) -> list[PublishRecord]:
    """Turn the loaded YAML document into a flat list of PublishRecords.

    Each list item holds a ``source`` key plus one key per service; every
    (source, service) pair becomes one record. Services we don't know are
    skipped with a warning. Raises RecordFileError on structural problems
    or when a (service, id) pair appears twice.
    """
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise RecordFileError(path, "expected a list of records at the top level")

    records: dict[tuple[str, str], PublishRecord] = {}
    seen: dict[tuple[str, str], str] = {}

    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise RecordFileError(path, f"item {index} is not a mapping")
        source = item.get("source", PROJECT_SOURCE)
        if not isinstance(source, str) or not source.strip():
            raise RecordFileError(path, f"item {index} has an invalid source")
        source = source.strip()

        for key, value in item.items():
            if key == "source":
                continue
            if not is_known_service(str(key)):
                logger.warning("skipping unknown service %r in %s", key, path)
                continue
            service = normalize_service_name(str(key))
            if value is None:
                value = []
            if not isinstance(value, list):
                raise RecordFileError(path, f"{service} entries for {source!r} must be a list")

            record = records.setdefault(
                (source, service), PublishRecord(source=source, service=service)
            )
            for raw_entry in value:
                if not isinstance(raw_entry, dict):
                    raise RecordFileError(path, f"{service} entry for {source!r} is not a mapping")
                bad_keys = [k for k in raw_entry if not isinstance(k, str)]
                if bad_keys:
                    raise RecordFileError(
                        path, f"{service} entry for {source!r} has a non-string key {bad_keys[0]!r}"
                    )
                try:
                    entry = PublishEntry.model_validate(raw_entry)
                except ValidationError as e:
                    raise RecordFileError(path, str(e)) from e
                owner = seen.get((service, entry.id))
                if owner is not None:
                    raise RecordFileError(
                        path, f"duplicate {service} id {entry.id!r} (sources {owner!r}, {source!r})"
                    )
                seen[(service, entry.id)] = source
                record.entries.append(entry)

    return list(records.values())


class RecordStore:
    """Record file bound to one source (a project directory or a document).

    A directory target maps to ``<dir>/_publish.yml`` with ``source: project``;
    a file target maps to ``_publish.yml`` beside it with ``source: <file name>``.

    Writes touch only this source's entries for one service. Everything else
    in the file (other sources, services we don't know, extra keys on an
    entry) is written back as it was read.
    """

    def __init__(self, path: Path, source: str = PROJECT_SOURCE) -> None:
        self.path = Path(path)
        self.source = source

    @classmethod
    def for_target(cls, target: str | Path, record_file: str = DEFAULT_RECORD_FILE) -> RecordStore:
        target = Path(target)
        if target.is_file():
            return cls(target.parent / record_file, source=target.name)
        return cls(target / record_file, source=PROJECT_SOURCE)

    # -- reading -----------------------------------------------------------

    def _read_raw(self) -> Any:
        if not self.path.exists():
            logger.debug("no record file at %s", self.path)
            return None
        try:
            return yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise RecordFileError(self.path, f"cannot read file: {e}") from e
        except yaml.YAMLError as e:
            raise RecordFileError(self.path, f"invalid YAML: {e}") from e

    def load_all(self) -> list[PublishRecord]:
        """Every record in the file, regardless of source."""
        records = parse_records(self._read_raw(), self.path)
        logger.debug("loaded %d record(s) from %s", len(records), self.path)
        return records

    def load(self) -> list[PublishRecord]:
        """Records belonging to this store's source."""
        return [r for r in self.load_all() if r.source == self.source]

    # -- writing -----------------------------------------------------------

    def add(self, service: str, entry: PublishEntry, *, dry_run: bool = False) -> PublishEntry:
        """Upsert an entry for this source.

        An existing (service, id) entry for the same source is updated in
        place; the same pair recorded under another source is an error.
        """
        service = normalize_service_name(service)
        raw = self._read_raw()
        for record in parse_records(raw, self.path):
            if record.service == service and record.source != self.source and record.find(entry.id):
                raise RecordFileError(
                    self.path,
                    f"{service} id {entry.id!r} is already recorded for source {record.source!r}",
                )

        items: list[dict[str, Any]] = raw or []
        lists = _entry_lists(items, self.source, service)
        existing = next((e for lst in lists for e in lst if _raw_id(e) == entry.id), None)
        if existing is not None:
            # url/server are replaced wholesale; unrecognized keys stay
            existing.pop("url", None)
            existing.pop("server", None)
            existing.update(entry.to_yaml_dict())
        elif lists:
            lists[-1].append(entry.to_yaml_dict())
        else:
            item = next((i for i in items if _raw_source(i) == self.source), None)
            if item is None:
                item = {"source": self.source}
                items.append(item)
            item[service] = [entry.to_yaml_dict()]

        if dry_run:
            logger.debug("dry-run: would record %s %s in %s", service, entry.id, self.path)
            return entry

        self._write(items)
        logger.info("recorded %s target %s for %s", service, entry.id, self.source)
        return entry

    def remove(self, service: str, entry_id: str, *, dry_run: bool = False) -> bool:
        """Drop an entry for this source. Returns False if it wasn't there."""
        service = normalize_service_name(service)
        entry_id = entry_id.strip()
        raw = self._read_raw()
        parse_records(raw, self.path)
        items: list[dict[str, Any]] = raw or []

        for item in items:
            if _raw_source(item) != self.source:
                continue
            for key in [k for k in item if _is_service_key(k, service)]:
                entries = item[key] or []
                match = next((e for e in entries if _raw_id(e) == entry_id), None)
                if match is None:
                    continue
                if dry_run:
                    logger.debug("dry-run: would remove %s %s from %s", service, entry_id, self.path)
                    return True
                entries.remove(match)
                if not entries:
                    del item[key]
                if set(item) <= {"source"}:
                    items.remove(item)
                self._write(items)
                logger.info("removed %s target %s for %s", service, entry_id, self.source)
                return True
        return False

    def _write(self, items: list[dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            yaml.safe_dump(items, default_flow_style=False, sort_keys=False),
            encoding="utf-8",
        )
        logger.debug("wrote %s (%d item(s))", self.path, len(items))


# Helpers over the raw YAML items. They assume parse_records already
# accepted the document.


def _raw_source(item: dict[str, Any]) -> str:
    return str(item.get("source", PROJECT_SOURCE)).strip()


def _raw_id(raw_entry: dict[str, Any]) -> str:
    return str(raw_entry.get("id", "")).strip()


def _is_service_key(key: Any, service: str) -> bool:
    return key != "source" and normalize_service_name(str(key)) == service


def _entry_lists(items: list[dict[str, Any]], source: str, service: str) -> list[list[dict]]:
    """The raw entry lists of (source, service), in file order."""
    lists = []
    for item in items:
        if _raw_source(item) != source:
            continue
        for key in [k for k in item if _is_service_key(k, service)]:
            if item[key] is None:
                item[key] = []
            lists.append(item[key])
    return lists
