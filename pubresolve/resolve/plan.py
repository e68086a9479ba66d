"""Combine target and credential resolution into a PublishPlan."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from pubresolve.records.models import PROJECT_SOURCE, PublishRecord
from pubresolve.resolve.credentials import resolve_credentials
from pubresolve.resolve.models import PublishPlan
from pubresolve.resolve.targets import resolve_target

logger = logging.getLogger(__name__)


def plan_publish(
    records: Sequence[PublishRecord],
    service: str | None = None,
    target_id: str | None = None,
    server: str | None = None,
    render: bool = True,
    env: Mapping[str, str] | None = None,
    source: str = PROJECT_SOURCE,
) -> PublishPlan:
    """Resolve the target, then its credentials. Either step may raise."""
    target = resolve_target(
        records, service=service, target_id=target_id, server=server, source=source
    )
    credentials = resolve_credentials(target.service, env=env, target=target)
    logger.debug(
        "resolved %s target %s (render=%s)",
        target.service, target.id, render,
        extra={"service": target.service, "target_id": target.id},
    )
    return PublishPlan(target=target, credentials=credentials, render=render)
