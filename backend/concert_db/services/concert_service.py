"""
Concert data access over the Firebase Realtime Database.

DATA LAYOUT
===========

  concerts/links            push-keyed children, one concert link URL each
  concerts/concerts_count   integer counter
  concerts/revid            integer revision id, overwritten wholesale

Push keys sort chronologically, so ordering the children by key gives the
append order. Links are never removed from here.

CONSISTENCY
===========

Nothing is locked locally. The counter increment uses the Firebase
transaction primitive (compare-and-set with client retries inside the SDK),
everything else is a single read or write.

Random selection reads the whole `concerts` node once and bounds the index by
both the stored count and the number of links actually present. Reading the
count and the links separately could pick an index past the end of the list
when a push lands between the two reads.

ERRORS
======

  - Arguments are type-checked before any remote call (InvalidArgumentError)
  - Writers wrap Firebase failures: DatabaseOperationError("Failed to ...: <cause>")
  - Readers, update_count and set_count log the failure and re-raise it unchanged

The Admin SDK is blocking, so each call runs in a worker thread.
"""

import asyncio
import math
import random
from typing import Any, Optional, Sequence

from firebase_admin.exceptions import FirebaseError

from concert_db.core.errors import DatabaseOperationError, InvalidArgumentError
from concert_db.core.logging import get_logger
from concert_db.core.metrics import record_db_operation, record_links_pushed
from concert_db.infrastructure.firebase_client import get_reference

logger = get_logger(__name__)

CONCERTS_PATH = "concerts"
LINKS_PATH = "concerts/links"
COUNT_PATH = "concerts/concerts_count"
REVID_PATH = "concerts/revid"


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid count or revid
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _ordered_links(value: Any) -> list[str]:
    """Flatten a concerts/links value into append order."""
    if not value:
        return []
    if isinstance(value, dict):
        children = [value[key] for key in sorted(value)]
    else:
        # A node written as an array comes back as a list, with None for gaps
        children = value
    return [link for link in children if isinstance(link, str)]


def get_random_int(max_value: int) -> int:
    """Random integer in [0, max_value)."""
    return math.floor(random.random() * max_value)


async def get_data(path: str) -> Any:
    """Read the value stored at path. Returns None if nothing is stored there."""
    try:
        value = await asyncio.to_thread(get_reference(path).get)
    except FirebaseError as e:
        record_db_operation("get_data", "error")
        logger.error("get_data_failed", path=path, error=str(e))
        raise

    record_db_operation("get_data")
    return value


async def set_revid(revid: float) -> None:
    if not revid or not _is_number(revid):
        record_db_operation("set_revid", "invalid")
        raise InvalidArgumentError("revid must be a valid number")

    try:
        await asyncio.to_thread(get_reference(REVID_PATH).set, revid)
    except FirebaseError as e:
        record_db_operation("set_revid", "error")
        raise DatabaseOperationError(f"Failed to set revid: {e}") from e

    record_db_operation("set_revid")
    logger.info("revid_set", revid=revid)


async def get_revid() -> Any:
    return await get_data(REVID_PATH)


def _push_all(links: Sequence[str]) -> None:
    ref = get_reference(LINKS_PATH)
    # One at a time: push keys are assigned in request order
    for link in links:
        ref.push(link)


async def set_concerts_links(concerts_links: Sequence[str]) -> None:
    """
    Append every link in concerts_links to concerts/links, in order.
    Existing links are kept.
    """
    if (
        not isinstance(concerts_links, (list, tuple))
        or not concerts_links
        or not all(isinstance(link, str) and link for link in concerts_links)
    ):
        record_db_operation("set_concerts_links", "invalid")
        raise InvalidArgumentError("concerts/links must be non-empty array")

    try:
        await asyncio.to_thread(_push_all, concerts_links)
    except FirebaseError as e:
        record_db_operation("set_concerts_links", "error")
        raise DatabaseOperationError(f"Failed to set concertsLinks: {e}") from e

    record_db_operation("set_concerts_links")
    record_links_pushed(len(concerts_links))
    logger.info("concert_links_pushed", count=len(concerts_links))


async def add_new_concert_link(link: str) -> str:
    """Append a single link. Returns the push key Firebase assigned to it."""
    if not link or not isinstance(link, str):
        record_db_operation("add_new_concert_link", "invalid")
        raise InvalidArgumentError("concertLink must be a valid string")

    try:
        new_ref = await asyncio.to_thread(get_reference(LINKS_PATH).push, link)
    except FirebaseError as e:
        record_db_operation("add_new_concert_link", "error")
        raise DatabaseOperationError(f"Failed to add new concert link: {e}") from e

    record_db_operation("add_new_concert_link")
    record_links_pushed()
    logger.info("concert_link_added", key=new_ref.key)
    return new_ref.key


async def get_concert_links() -> list[str]:
    return _ordered_links(await get_data(LINKS_PATH))


async def get_rand_concert() -> Optional[str]:
    """
    Pick a random concert link.
    The index is drawn from [0, concerts_count), clamped to the links present.
    Returns None when there is nothing to pick from.
    """
    try:
        snapshot = await asyncio.to_thread(get_reference(CONCERTS_PATH).get)
    except FirebaseError as e:
        record_db_operation("get_rand_concert", "error")
        logger.error("get_rand_concert_failed", error=str(e))
        raise

    record_db_operation("get_rand_concert")
    snapshot = snapshot or {}
    links = _ordered_links(snapshot.get("links"))
    max_count = snapshot.get("concerts_count")

    upper = len(links)
    if _is_number(max_count):
        upper = min(int(max_count), upper)

    if upper <= 0:
        logger.warning("no_concerts_available", concerts_count=max_count, links=len(links))
        return None

    return links[get_random_int(upper)]


def _increment(current_value: Any) -> int:
    # A missing or corrupted counter restarts from zero
    return (current_value if _is_number(current_value) else 0) + 1


async def update_count() -> int:
    """Atomically increment concerts/concerts_count. Returns the committed value."""
    try:
        new_count = await asyncio.to_thread(
            get_reference(COUNT_PATH).transaction,
            _increment,
        )
    except FirebaseError as e:
        record_db_operation("update_count", "error")
        logger.error("update_count_failed", error=str(e))
        raise

    record_db_operation("update_count")
    logger.info("concerts_count_updated", count=new_count)
    return new_count


async def get_count() -> Any:
    try:
        value = await asyncio.to_thread(get_reference(COUNT_PATH).get)
    except FirebaseError as e:
        record_db_operation("get_count", "error")
        logger.error("get_count_failed", error=str(e))
        raise

    record_db_operation("get_count")
    return value


async def set_count(num: float) -> None:
    if not _is_number(num):
        record_db_operation("set_count", "invalid")
        raise InvalidArgumentError("Count must be a valid number")

    try:
        await asyncio.to_thread(get_reference(COUNT_PATH).set, num)
    except FirebaseError as e:
        record_db_operation("set_count", "error")
        logger.error("set_count_failed", count=num, error=str(e))
        raise

    record_db_operation("set_count")
    logger.info("concerts_count_set", count=num)
