"""pubresolve — publish target and credential resolution for CI publishing."""

from pubresolve.config import PubResolveConfig, load_config
from pubresolve.errors import (
    AmbiguousTargetError,
    MissingCredentialsError,
    NoTargetConfiguredError,
    PublishResolutionError,
    RecordFileError,
    UnknownServiceError,
)
from pubresolve.records import PublishEntry, PublishRecord, RecordStore
from pubresolve.resolve import (
    CredentialSet,
    PublishPlan,
    ResolvedTarget,
    plan_publish,
    resolve_credentials,
    resolve_target,
)

__version__ = "0.1.0"

__all__ = [
    "AmbiguousTargetError",
    "CredentialSet",
    "MissingCredentialsError",
    "NoTargetConfiguredError",
    "PubResolveConfig",
    "PublishEntry",
    "PublishPlan",
    "PublishRecord",
    "PublishResolutionError",
    "RecordFileError",
    "RecordStore",
    "ResolvedTarget",
    "UnknownServiceError",
    "load_config",
    "plan_publish",
    "resolve_credentials",
    "resolve_target",
]
