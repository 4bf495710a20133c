import asyncio
import os
import sys
import uuid

sys.path.append(os.path.join(os.path.dirname(__file__), '../backend'))

from smartq.db.database import AsyncSessionLocal
from smartq.repositories.queue import QueueRepository
from smartq.repositories.queue_entry import QueueEntryRepository


async def list_queue(queue_id: uuid.UUID):
    async with AsyncSessionLocal() as session:
        queue = await QueueRepository(session).get_by_id(queue_id)
        if not queue:
            print(f"Queue {queue_id} not found")
            return
        print(f"Queue {queue.id} [{queue.status.value}]")
        print(f"  Size: {queue.current_size} / {queue.max_capacity or 'unbounded'}")
        print(f"  Last number issued: {queue.last_queue_number}")
        print("-" * 20)

        entries = await QueueEntryRepository(session).get_all_for_queue(queue_id)
        for e in entries:
            served = f" served {e.served_at:%Y-%m-%d %H:%M}" if e.served_at else ""
            print(f"#{e.queue_number:<4} {e.status.value:<10} {e.user.email if e.user else e.user_id}{served}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/list_queue.py <queue_id>")
        sys.exit(1)
    asyncio.run(list_queue(uuid.UUID(sys.argv[1])))
