"""Password Hash Workers — dedicated thread pool for CPU-bound argon2 work.

Invariants:
    - Hash verification never runs on the event loop thread
    - The pool is separate from the loop's default executor, so slow hashing
      cannot starve other to_thread()/run_in_executor() users
    - verify_password_hash distinguishes a mismatch from an unparseable PHC string

Design Decisions:
    - ThreadPoolExecutor over ProcessPoolExecutor: argon2-cffi releases the GIL
      inside the C hashing routine, so threads get real parallelism without pickling
    - Lazily created with defaults when lifespan did not run (scripts, tests)
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, TypeVar

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_WORKERS = 4

# Same parameters as DUMMY_PASSWORD_HASH in services/credentials.py, so real and
# dummy verifications cost the same.
_password_hasher = PasswordHasher(
    time_cost=2, memory_cost=15000, parallelism=1, type=Type.ID,
)


class MalformedPasswordHashError(ValueError):
    """Stored hash is not a parseable PHC string."""


def hash_password(password: str) -> str:
    """Hash a password into an argon2id PHC string."""
    return _password_hasher.hash(password)


def verify_password_hash(expected_password_hash: str, password_candidate: str) -> bool:
    """Verify a candidate password against a PHC string. Blocking — run in the pool."""
    try:
        return _password_hasher.verify(expected_password_hash, password_candidate)
    except InvalidHashError as e:
        raise MalformedPasswordHashError(
            "Failed to parse hash in PHC string format",
        ) from e
    except VerificationError:
        return False


_executor: ThreadPoolExecutor | None = None


def init_password_hash_workers(max_workers: int = DEFAULT_WORKERS) -> None:
    global _executor
    _executor = ThreadPoolExecutor(
        max_workers=max_workers, thread_name_prefix="password-hash",
    )


async def shutdown_password_hash_workers() -> None:
    """Drain in-flight verifications off the event loop, then drop the pool."""
    global _executor
    executor, _executor = _executor, None
    if executor:
        await asyncio.to_thread(executor.shutdown, wait=True)


async def run_cpu_bound(fn: Callable[..., T], *args) -> T:
    """Run a blocking CPU-bound callable on the password-hash pool."""
    if _executor is None:
        logger.info("Password hash workers not initialized, starting defaults")
        init_password_hash_workers()
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(_executor, fn, *args)
