"""
Queue admission and entry lifecycle.

Joining a queue is a check-then-act sequence (capacity, membership, next
position number, insert, size increment). It runs as one transaction with
the queue row locked, and is additionally serialised per queue inside this
process, so concurrent joiners cannot both pass the capacity check or be
handed the same number.
"""
import logging
import uuid
from datetime import datetime
from typing import Callable, List, Optional, Tuple, Union

from sqlalchemy.ext.asyncio import AsyncSession

from smartq.core.locks import QueueLockManager, queue_lock_manager
from smartq.exceptions import (
    CapacityExceededError,
    DuplicateMembershipError,
    InvalidStatusTransitionError,
    NotFoundError,
    QueueClosedError,
)
from smartq.models.queue_entry import EntryStatus, QueueEntry
from smartq.repositories.queue import QueueRepository
from smartq.repositories.queue_entry import QueueEntryRepository
from smartq.utils.status_utils import (
    can_transition_entry,
    is_entry_served,
    is_entry_terminal,
    is_entry_waiting,
    is_queue_open,
    normalize_entry_status,
)

logger = logging.getLogger(__name__)


class QueueEntryService:
    def __init__(
        self,
        session_factory: Callable[..., AsyncSession],
        lock_manager: Optional[QueueLockManager] = None,
        queue_repository_class=QueueRepository,
        queue_entry_repository_class=QueueEntryRepository,
    ):
        self.session_factory = session_factory
        self.lock_manager = lock_manager or queue_lock_manager
        self.queue_repository_class = queue_repository_class
        self.queue_entry_repository_class = queue_entry_repository_class

    @staticmethod
    def _lock_key(queue_id: uuid.UUID) -> str:
        return f"queue:{queue_id}"

    async def join_queue(self, queue_id: uuid.UUID, user_id: uuid.UUID) -> QueueEntry:
        """
        Admits a user to a queue and returns the new waiting entry.

        Raises:
            NotFoundError: the queue does not exist
            QueueClosedError: the queue is not accepting joiners
            DuplicateMembershipError: the user already waits in this queue
            CapacityExceededError: current_size has reached max_capacity
        """
        async with self.lock_manager.hold(self._lock_key(queue_id)):
            async with self.session_factory() as session:
                queue_repo = self.queue_repository_class(session)
                entry_repo = self.queue_entry_repository_class(session)

                queue = await queue_repo.get_by_id(queue_id, for_update=True)
                if not queue:
                    raise NotFoundError("Queue not found")

                if not is_queue_open(queue.status):
                    logger.info(f"Rejected join of user {user_id} to closed queue {queue_id}")
                    raise QueueClosedError()

                existing = await self.is_user_joined(queue_id, user_id, entry_repo=entry_repo)
                if existing:
                    logger.info(
                        f"Rejected join of user {user_id} to queue {queue_id}: "
                        f"already waiting as #{existing.queue_number}"
                    )
                    raise DuplicateMembershipError()

                current_size = queue.current_size or 0
                if queue.is_full:
                    logger.info(
                        f"Rejected join of user {user_id} to queue {queue_id}: "
                        f"full ({current_size}/{queue.max_capacity})"
                    )
                    raise CapacityExceededError()

                next_number = await self._next_queue_number(queue, entry_repo)

                entry = QueueEntry(
                    queue_id=queue.id,
                    user_id=user_id,
                    queue_number=next_number,
                    status=EntryStatus.WAITING.value,
                    joined_at=datetime.utcnow(),
                    served_at=None,
                )
                await entry_repo.save(entry)

                queue.current_size = current_size + 1
                queue.last_queue_number = next_number
                await queue_repo.save(queue)

                await session.commit()
                logger.info(
                    f"User {user_id} joined queue {queue_id} as #{next_number} "
                    f"(size {queue.current_size}/{queue.max_capacity or 'unbounded'})"
                )
                return entry

    async def _next_queue_number(self, queue, entry_repo: QueueEntryRepository) -> int:
        """
        The stored counter is authoritative. The highest existing number is
        consulted too so queues whose counter lags their rows (e.g. rows
        imported before the counter existed) never reissue a number.
        """
        counter = queue.last_queue_number or 0
        last_entry = await entry_repo.get_last_entry(queue.id)
        highest = last_entry.queue_number if last_entry else 0
        if highest > counter:
            logger.warning(
                f"Queue {queue.id} counter {counter} is behind highest entry #{highest}; "
                f"continuing from #{highest}"
            )
        return max(counter, highest) + 1

    async def is_user_joined(
        self,
        queue_id: uuid.UUID,
        user_id: uuid.UUID,
        entry_repo: Optional[QueueEntryRepository] = None,
    ) -> Optional[QueueEntry]:
        """
        Returns the user's waiting entry in the queue, or None.
        """
        if entry_repo is not None:
            return await entry_repo.get_active_for_user(queue_id, user_id)
        async with self.session_factory() as session:
            repo = self.queue_entry_repository_class(session)
            return await repo.get_active_for_user(queue_id, user_id)

    async def update_entry_status(
        self,
        entry_id: uuid.UUID,
        new_status: Union[str, EntryStatus],
    ) -> QueueEntry:
        """
        Moves an entry along waiting -> served / waiting -> cancelled.

        Requesting the status the entry already has is a no-op. Any other
        change out of served or cancelled raises InvalidStatusTransitionError.
        served_at is stamped when the entry becomes served.
        """
        target = normalize_entry_status(new_status)
        if target not in {s.value for s in EntryStatus}:
            raise InvalidStatusTransitionError(f"Unknown queue entry status '{new_status}'")

        async with self.lock_manager.hold(f"entry:{entry_id}"):
            async with self.session_factory() as session:
                repo = self.queue_entry_repository_class(session)
                entry = await repo.get_by_id(entry_id, for_update=True)
                if not entry:
                    raise NotFoundError("Queue entry not found")

                current = normalize_entry_status(entry.status)
                if current == target:
                    logger.debug(f"Entry {entry_id} already {current}; nothing to do")
                    return await repo.get_by_id(entry_id, with_user=True)

                if is_entry_terminal(current) or not can_transition_entry(current, target):
                    logger.warning(f"Rejected status change of entry {entry_id}: {current} -> {target}")
                    raise InvalidStatusTransitionError(
                        f"Cannot change queue entry status from {current} to {target}"
                    )

                entry.status = EntryStatus(target).value
                if is_entry_served(target):
                    entry.served_at = datetime.utcnow()
                await repo.update(entry)
                await session.commit()

                logger.info(f"Entry {entry_id} (#{entry.queue_number}) moved {current} -> {target}")
                return await repo.get_by_id(entry_id, with_user=True)

    async def get_queue_entries(self, queue_id: uuid.UUID) -> List[QueueEntry]:
        """
        All entries of the queue in line order (queue_number ascending).
        """
        async with self.session_factory() as session:
            queue_repo = self.queue_repository_class(session)
            if not await queue_repo.get_by_id(queue_id):
                raise NotFoundError("Queue not found")
            repo = self.queue_entry_repository_class(session)
            return await repo.get_all_for_queue(queue_id)

    async def get_entries_for_user(self, user_id: uuid.UUID) -> List[QueueEntry]:
        async with self.session_factory() as session:
            repo = self.queue_entry_repository_class(session)
            return await repo.get_all_for_user(user_id)

    async def get_entry_with_position(self, entry_id: uuid.UUID) -> Tuple[QueueEntry, Optional[int]]:
        """
        Returns the entry and its 1-based place among the queue's waiting
        entries. The place is None for served or cancelled entries.
        """
        async with self.session_factory() as session:
            repo = self.queue_entry_repository_class(session)
            entry = await repo.get_by_id(entry_id, with_user=True)
            if not entry:
                raise NotFoundError("Queue entry not found")
            if not is_entry_waiting(entry.status):
                return entry, None
            ahead = await repo.count_waiting_ahead(entry.queue_id, entry.queue_number)
            return entry, ahead + 1
