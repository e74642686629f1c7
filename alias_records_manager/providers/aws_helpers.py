"""
AWS call helpers - throttling-aware calls and paged listings

boto3 clients are blocking, so every call is handed to the event loop's
default executor and the calling task suspends until the response arrives.
Calls made through the same client are serialized to stay under the Route53
request rate limit.
"""

import asyncio
import functools
import logging
import random
import weakref
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (
    "Throttling",
    "RequestLimitExceeded",
    "TooManyRequestsException",
    "PriorRequestNotComplete",
)

_client_locks = weakref.WeakKeyDictionary()


@dataclass
class RetryPolicy:
    """Backoff settings for throttled calls (seconds)."""

    min_wait: float = 3.0
    max_wait: float = 60.0
    max_time_passed: float = 300.0
    max_attempts: int = 20

    @classmethod
    def from_dict(cls, config: Optional[Dict]) -> "RetryPolicy":
        config = config or {}
        defaults = cls()
        return cls(
            min_wait=float(config.get("min_wait", defaults.min_wait)),
            max_wait=float(config.get("max_wait", defaults.max_wait)),
            max_time_passed=float(config.get("max_time_passed", defaults.max_time_passed)),
            max_attempts=int(config.get("max_attempts", defaults.max_attempts)),
        )

    def next_interval(self, previous_interval: float) -> float:
        """Decorrelated jitter: grows roughly 3x per retry, capped at max_wait."""
        upper = max(self.min_wait, previous_interval * 3)
        return min(self.max_wait, random.uniform(self.min_wait, upper))


DEFAULT_RETRY_POLICY = RetryPolicy()


def is_throttling_error(error: Exception) -> bool:
    if not isinstance(error, ClientError):
        return False
    return error.response.get("Error", {}).get("Code") in RETRYABLE_ERRORS


def _lock_for(client) -> asyncio.Lock:
    # asyncio locks are bound to the loop they first wait on
    loop_locks = _client_locks.setdefault(client, weakref.WeakKeyDictionary())
    loop = asyncio.get_running_loop()
    lock = loop_locks.get(loop)
    if lock is None:
        lock = asyncio.Lock()
        loop_locks[loop] = lock
    return lock


async def throttled_call(
    client, operation: str, params: Dict, policy: Optional[RetryPolicy] = None
) -> Dict[str, Any]:
    """
    Call a boto3 client operation, retrying when AWS throttles the request.

    Args:
        client: boto3 client (or anything exposing the same methods)
        operation: Client method name, e.g. "list_hosted_zones"
        params: Keyword arguments for the operation
        policy: Backoff settings, DEFAULT_RETRY_POLICY when omitted

    Returns:
        The operation response

    Raises:
        ClientError: Non-throttling errors immediately, throttling errors once
            the attempts or the time budget are used up
    """
    policy = policy or DEFAULT_RETRY_POLICY
    method = functools.partial(getattr(client, operation), **params)
    loop = asyncio.get_running_loop()

    attempt = 0
    time_passed = 0.0
    previous_interval = 0.0
    while True:
        attempt += 1
        try:
            async with _lock_for(client):
                return await loop.run_in_executor(None, method)
        except ClientError as e:
            if not is_throttling_error(e):
                raise
            if attempt >= policy.max_attempts or time_passed >= policy.max_time_passed:
                logger.debug(f"Giving up on {operation} after {attempt} throttled attempts")
                raise

            # Never sleep past the time budget
            interval = min(policy.next_interval(previous_interval), policy.max_time_passed - time_passed)
            logger.debug(
                f"Throttled by AWS API on {operation} (attempt {attempt}), retrying in {interval:.1f}s"
            )
            await asyncio.sleep(interval)
            time_passed += interval
            previous_interval = interval


async def get_aws_paged_results(
    client,
    operation: str,
    result_key: str,
    request_cursor_key: str,
    response_cursor_key: str,
    params: Dict,
    policy: Optional[RetryPolicy] = None,
) -> List[Dict]:
    """
    Collect every item of a cursor-paginated AWS listing.

    Args:
        client: boto3 client
        operation: Listing method name, e.g. "list_hosted_zones"
        result_key: Response key holding the page items, e.g. "HostedZones"
        request_cursor_key: Request parameter carrying the cursor, e.g. "Marker"
        response_cursor_key: Response key holding the next cursor, e.g. "NextMarker"
        params: Base request parameters (left untouched)
        policy: Backoff settings passed to throttled_call

    Returns:
        All items across pages, in listing order
    """
    request = dict(params)
    results = []

    response = await throttled_call(client, operation, request, policy)
    results.extend(response.get(result_key) or [])
    while response.get(response_cursor_key):
        request[request_cursor_key] = response[response_cursor_key]
        response = await throttled_call(client, operation, request, policy)
        results.extend(response.get(result_key) or [])

    return results
