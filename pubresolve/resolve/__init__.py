"""Target and credential resolution for a publish invocation."""

from pubresolve.resolve.credentials import resolve_credentials
from pubresolve.resolve.models import CredentialSet, PublishPlan, ResolvedTarget
from pubresolve.resolve.plan import plan_publish
from pubresolve.resolve.targets import resolve_target

__all__ = [
    "CredentialSet",
    "PublishPlan",
    "ResolvedTarget",
    "plan_publish",
    "resolve_credentials",
    "resolve_target",
]
