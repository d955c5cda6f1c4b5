"""Utility functions for validation, concurrency and logging"""

import asyncio
import hashlib
import sys
from typing import Any, Awaitable, Iterable, List, Optional, Tuple
import base58
from loguru import logger


SS58_PREFIX = b"SS58PRE"


def validate_account_id(address: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a Substrate (SS58) account address

    Returns:
        (is_valid, normalized_address or None)
    """
    if not address or not isinstance(address, str):
        return False, None

    address = address.strip()

    # 32-byte account + 1 or 2 prefix bytes + 2 checksum bytes, base58 encoded
    if len(address) < 46 or len(address) > 50:
        return False, None

    try:
        decoded = base58.b58decode(address)
    except ValueError as e:
        logger.debug(f"Account id decode error: {e}")
        return False, None

    if len(decoded) not in (35, 36):
        return False, None

    payload, checksum = decoded[:-2], decoded[-2:]
    expected = hashlib.blake2b(SS58_PREFIX + payload, digest_size=64).digest()[:2]
    if checksum != expected:
        return False, None

    return True, address


async def gather_or_cancel(aws: Iterable[Awaitable[Any]]) -> List[Any]:
    """
    Run awaitables concurrently and return their results in order.

    The first failure cancels every task still pending and is re-raised
    once they have finished cancelling.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []

    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    failed = next(
        (t for t in tasks if t in done and not t.cancelled() and t.exception() is not None),
        None,
    )
    if failed is not None:
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        # Retrieve remaining exceptions so none is reported as never retrieved
        for task in done:
            if task is not failed and not task.cancelled():
                task.exception()
        raise failed.exception()

    return [task.result() for task in tasks]


def setup_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with one at the given level"""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>",
    )
