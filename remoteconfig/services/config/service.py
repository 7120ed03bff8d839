"""
Remote Config Service

Responsible for:
- Fetching the latest values from the backend
- Activating them into the Config Store when they differ
- Tracking fetch status for diagnostics and the health endpoint
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Protocol

from remoteconfig.common.exceptions import FetchError, FetchErrorKind
from remoteconfig.common.logging_setup import get_service_logger, log_config_values

from .keys import DIAGNOSTIC_KEYS
from .store import ConfigStore
from .values import ConfigValue

logger = get_service_logger("config")


class Fetcher(Protocol):
    """Anything that can produce the latest remote value set"""

    async def fetch(self) -> dict[str, ConfigValue]: ...


class FetchStatus(str, Enum):
    NEVER_FETCHED = "never_fetched"
    IN_PROGRESS = "in_progress"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one fetch-and-activate call"""
    activated: bool = False
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "activated": self.activated,
            "error": self.error.kind.value if self.error else None,
            "message": self.error.message if self.error else None,
        }


@dataclass
class FetchInfo:
    """Diagnostics about the most recent fetches"""
    status: FetchStatus = FetchStatus.NEVER_FETCHED
    last_fetch_at: datetime | None = None
    last_success_at: datetime | None = None
    last_error: FetchError | None = None
    fetch_count: int = 0
    activation_count: int = 0

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "last_fetch_at": self.last_fetch_at.isoformat() if self.last_fetch_at else None,
            "last_success_at": self.last_success_at.isoformat() if self.last_success_at else None,
            "last_error": self.last_error.message if self.last_error else None,
            "fetch_count": self.fetch_count,
            "activation_count": self.activation_count,
        }


class RemoteConfigService:
    """
    Fetch/Activate operation over an injected store and fetcher.

    Calls may overlap. Each one activates its own result inside the
    store's critical section, so results land in completion order and a
    slower, older fetch can overwrite a newer one (last writer wins).
    """

    def __init__(self, store: ConfigStore, fetcher: Fetcher):
        self.store = store
        self.fetcher = fetcher
        self.info = FetchInfo()
        self._in_flight = 0

    @property
    def in_flight(self) -> int:
        """Number of fetches currently awaiting the backend"""
        return self._in_flight

    async def fetch_and_activate(self) -> FetchResult:
        """
        Fetch the latest values and activate them if they differ.

        Never raises for fetch failures: they come back as a failed
        FetchResult and the store keeps its current generation.

        Returns:
            FetchResult with activated=True when new values were applied
        """
        logger.debug("Starting Remote Config fetch...")
        self._in_flight += 1
        self.info.status = FetchStatus.IN_PROGRESS
        self.info.fetch_count += 1

        try:
            fetched = await self.fetcher.fetch()
        except FetchError as e:
            return self._record_failure(e)
        except asyncio.CancelledError:
            self._settle(FetchStatus.FAILED)
            raise
        except Exception as e:
            logger.error(f"Unexpected error fetching Remote Config: {e}", exc_info=True)
            return self._record_failure(FetchError(FetchErrorKind.NETWORK, str(e)))

        try:
            activated = self.store.apply_if_changed(fetched)
        except TypeError as e:
            return self._record_failure(FetchError(FetchErrorKind.PARSE, str(e)))

        now = datetime.now(timezone.utc)
        self.info.last_success_at = now
        self.info.last_error = None
        self._settle(FetchStatus.SUCCEEDED, now)

        if activated:
            self.info.activation_count += 1
            logger.info(
                f"New values activated (generation {self.store.generation})",
                extra={"generation": self.store.generation, "keys": sorted(fetched)},
            )
            self.log_current_values()
        else:
            logger.info("Values were already up to date")

        return FetchResult(activated=activated)

    def log_current_values(self) -> None:
        """Dump the diagnostic keys at debug level"""
        snapshot = self.store.snapshot()
        log_config_values(
            logger,
            {key: snapshot.get(key) for key in DIAGNOSTIC_KEYS},
            self.info.status.value,
            self.info.last_fetch_at.isoformat() if self.info.last_fetch_at else None,
        )

    async def close(self) -> None:
        """Release the fetcher's resources, if it holds any"""
        close = getattr(self.fetcher, "close", None)
        if close is not None:
            await close()

    def _record_failure(self, error: FetchError) -> FetchResult:
        logger.error(
            f"Error fetching Remote Config: {error.message}",
            extra={"kind": error.kind.value, "status_code": error.status_code},
        )
        self.info.last_error = error
        self._settle(FetchStatus.FAILED)
        return FetchResult(activated=False, error=error)

    def _settle(self, status: FetchStatus, when: datetime | None = None) -> None:
        self._in_flight -= 1
        self.info.last_fetch_at = when or datetime.now(timezone.utc)
        # An overlapping fetch is still running
        self.info.status = FetchStatus.IN_PROGRESS if self._in_flight else status
