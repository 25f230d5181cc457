# Environment-derived metadata for each emitted record.
# Read on every call; nothing here is cached.

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class FieldSources:
    """Names of the environment variables feeding the metadata fields."""

    application: str = "APP_NAME"
    environment: str = "NODE_ENV"
    host: str = "HOST"


@dataclass(frozen=True)
class Metadata:
    application: str
    environment: Optional[str]
    host: Optional[str]


DEFAULT_SOURCES = FieldSources()


def _optional(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(name)
    return value if value else None


def read_metadata(
    env: Optional[Mapping[str, str]] = None,
    sources: FieldSources = DEFAULT_SOURCES,
) -> Metadata:
    """Snapshot the metadata fields from `env` (the live os.environ by default).

    `application` is always a string; `environment` and `host` are None when
    the variable is unset or empty so the caller can leave them out.
    """
    if env is None:
        env = os.environ
    return Metadata(
        application=env.get(sources.application) or "",
        environment=_optional(env, sources.environment),
        host=_optional(env, sources.host),
    )
