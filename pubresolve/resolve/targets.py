"""Target resolution: pick exactly one publish destination."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pubresolve.errors import AmbiguousTargetError, NoTargetConfiguredError
from pubresolve.records.models import PROJECT_SOURCE, PublishEntry, PublishRecord
from pubresolve.resolve.models import ResolvedTarget
from pubresolve.services import get_service

logger = logging.getLogger(__name__)


def _from_entry(record: PublishRecord, entry: PublishEntry, server: str | None) -> ResolvedTarget:
    return ResolvedTarget(
        service=record.service,
        id=entry.id,
        url=entry.url,
        server=server or entry.server,
        source=record.source,
        from_record=True,
    )


def _label(record: PublishRecord, entry: PublishEntry) -> str:
    return f"{record.service}:{entry.id}"


def resolve_target(
    records: Sequence[PublishRecord],
    service: str | None = None,
    target_id: str | None = None,
    server: str | None = None,
    source: str = PROJECT_SOURCE,
) -> ResolvedTarget:
    """Resolve the destination for one invocation.

    ``records`` must already be filtered to the current source. Explicit
    arguments always win over the record file; when they disagree with
    recorded url/server metadata, the explicit value is kept.

    Raises UnknownServiceError, AmbiguousTargetError or NoTargetConfiguredError.
    """
    spec = get_service(service) if service else None

    # Explicit service + id: no lookup required, but borrow recorded metadata.
    if spec is not None and target_id:
        for record in records:
            if record.service != spec.name:
                continue
            entry = record.find(target_id)
            if entry is not None:
                if server and entry.server and server != entry.server:
                    logger.debug(
                        "explicit server %s overrides recorded %s for %s",
                        server, entry.server, target_id,
                    )
                return _from_entry(record, entry, server)
        logger.debug("using explicit target %s:%s (not in record file)", spec.name, target_id)
        return ResolvedTarget(
            service=spec.name, id=target_id, server=server, source=source, from_record=False
        )

    # Service only: that service's entries must be unambiguous.
    if spec is not None:
        candidates = [
            (record, entry)
            for record in records
            if record.service == spec.name
            for entry in record.entries
        ]
        if not candidates:
            raise NoTargetConfiguredError(
                f"No {spec.display_name} destination recorded for this source",
                "Pass --id to publish to a specific target",
            )
        if len(candidates) > 1:
            raise AmbiguousTargetError(
                f"Multiple {spec.display_name} targets recorded",
                [_label(r, e) for r, e in candidates],
                "Pass --id to choose one",
            )
        record, entry = candidates[0]
        return _from_entry(record, entry, server)

    # Id only: find it under whichever service recorded it.
    if target_id:
        matches = [
            (record, entry)
            for record in records
            if (entry := record.find(target_id)) is not None
        ]
        if not matches:
            raise NoTargetConfiguredError(
                f"No recorded destination has id {target_id!r}",
                "Name the service to publish to (e.g. netlify, quarto-pub, connect)",
            )
        if len(matches) > 1:
            raise AmbiguousTargetError(
                f"Id {target_id!r} is recorded for several services",
                [_label(r, e) for r, e in matches],
                "Name the service to publish to",
            )
        record, entry = matches[0]
        return _from_entry(record, entry, server)

    # Nothing explicit: the record file must hold exactly one destination.
    populated = [record for record in records if record.entries]
    if not populated:
        raise NoTargetConfiguredError(
            "No publish destination configured",
            "Name a service (and --id) or publish once to create a record",
        )
    candidates = [(record, entry) for record in populated for entry in record.entries]
    if len(populated) > 1 or len(candidates) > 1:
        raise AmbiguousTargetError(
            "Multiple publish destinations recorded",
            [_label(r, e) for r, e in candidates],
            "Name the service and pass --id to choose one",
        )
    record, entry = candidates[0]
    return _from_entry(record, entry, server)
