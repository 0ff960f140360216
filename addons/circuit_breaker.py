"""
Circuit breakers guarding integration data fetches.

An integration whose fetches keep failing is short-circuited for a while so
lead refreshes do not wait on a service that is down.
"""
from enum import Enum
from datetime import datetime, timedelta
from typing import Dict, Optional
import logging
import threading

from django.utils import timezone

from .exceptions import CircuitBreakerOpenError

logger = logging.getLogger(__name__)


class CircuitState(Enum):
    """States of an integration's fetch circuit."""
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreaker:
    """
    Circuit breaker for a single integration.

    - CLOSED: fetches pass through
    - OPEN: fetches are rejected until the recovery timeout elapses
    - HALF_OPEN: one trial fetch decides whether to close or reopen
    """

    def __init__(
        self,
        integration: str,
        failure_threshold: int = 5,
        recovery_timeout: int = 60
    ):
        self.integration = integration
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.failure_count = 0
        self.last_failure_time: Optional[datetime] = None
        self.state = CircuitState.CLOSED
        self._half_open_attempts = 0

    @property
    def is_open(self) -> bool:
        return self.state == CircuitState.OPEN

    def record_success(self):
        if self.state == CircuitState.HALF_OPEN:
            logger.info(f"{self.integration}: Circuit recovered, closing")

        self.failure_count = 0
        self._half_open_attempts = 0
        self.state = CircuitState.CLOSED

    def record_failure(self, exception: Optional[BaseException] = None):
        self.failure_count += 1
        self.last_failure_time = timezone.now()

        if self.state == CircuitState.HALF_OPEN:
            self._half_open_attempts += 1
            logger.warning(f"{self.integration}: Fetch failed while half-open, reopening circuit")
            self.state = CircuitState.OPEN

        elif self.failure_count >= self.failure_threshold:
            if self.state != CircuitState.OPEN:
                logger.error(
                    f"{self.integration}: Failure threshold reached "
                    f"({self.failure_count}/{self.failure_threshold}), "
                    f"opening circuit"
                )
            self.state = CircuitState.OPEN

    def can_attempt(self) -> bool:
        if self.state == CircuitState.CLOSED:
            return True

        if self.state == CircuitState.OPEN:
            if self.last_failure_time and \
               timezone.now() - self.last_failure_time > timedelta(seconds=self.recovery_timeout):
                logger.info(f"{self.integration}: Recovery timeout reached, attempting recovery")
                self.state = CircuitState.HALF_OPEN
                self._half_open_attempts = 0
                return True
            return False

        # Half-open: a single trial fetch
        return self._half_open_attempts == 0

    def __enter__(self):
        if not self.can_attempt():
            raise CircuitBreakerOpenError(self.integration)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.record_success()
        elif issubclass(exc_type, Exception):
            self.record_failure(exc_val)

        # Let the fetch error reach the sync engine
        return False

    def get_state(self) -> dict:
        return {
            'integration': self.integration,
            'state': self.state.value,
            'failure_count': self.failure_count,
            'failure_threshold': self.failure_threshold,
            'last_failure_time': self.last_failure_time.isoformat() if self.last_failure_time else None,
            'recovery_timeout': self.recovery_timeout,
        }


class CircuitBreakerSet:
    """Lazily created circuit breakers, one per integration name."""

    def __init__(self, failure_threshold: int = 5, recovery_timeout: int = 60):
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self._breakers: Dict[str, CircuitBreaker] = {}
        self._lock = threading.Lock()

    def get(self, integration: str) -> CircuitBreaker:
        with self._lock:
            if integration not in self._breakers:
                self._breakers[integration] = CircuitBreaker(
                    integration,
                    failure_threshold=self.failure_threshold,
                    recovery_timeout=self.recovery_timeout
                )
            return self._breakers[integration]

    def reset(self, integration: str) -> None:
        with self._lock:
            self._breakers.pop(integration, None)
        logger.info(f"Circuit breaker for {integration} manually reset")

    def get_states(self) -> Dict[str, dict]:
        with self._lock:
            return {name: breaker.get_state() for name, breaker in self._breakers.items()}
