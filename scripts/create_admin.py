#!/usr/bin/env python3
"""
Creates (or promotes) an admin account. Self-registration cannot create admins.

Usage:
    python scripts/create_admin.py --email admin@example.com --name Admin --password secret123
"""
import argparse
import asyncio
import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), '../backend'))

from smartq.core.security import get_password_hash
from smartq.db.database import AsyncSessionLocal
from smartq.models.user import User, UserRole
from smartq.repositories.user import UserRepository


async def create_admin(email: str, name: str, password: str):
    async with AsyncSessionLocal() as session:
        repo = UserRepository(session)
        user = await repo.get_by_email(email)
        if user:
            user.role = UserRole.ADMIN.value
            await repo.update(user)
            print(f"Promoted existing user {user.id} ({email}) to admin")
        else:
            user = User(
                name=name,
                email=email.lower(),
                hashed_password=get_password_hash(password),
                role=UserRole.ADMIN.value,
            )
            await repo.create(user)
            print(f"Created admin {user.id} ({email})")
        await session.commit()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create or promote an admin account")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", default="Administrator")
    parser.add_argument("--password", required=True)
    args = parser.parse_args()

    asyncio.run(create_admin(args.email, args.name, args.password))
