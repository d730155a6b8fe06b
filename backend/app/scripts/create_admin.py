"""
Create Admin User Script
Creates an admin user if it does not already exist.
Usage: ADMIN_USERNAME=... ADMIN_EMAIL=... ADMIN_PASSWORD=... python -m app.scripts.create_admin
"""

import asyncio
import os
from sqlalchemy import select

from app.config import get_settings
from app.database import create_engine_from_settings, create_session_factory, close_db
from app.exceptions import ConflictError
from app.models.user import User
from app.schemas.user import UserCreate
from app.services import user_service

async def create_admin():
    username = os.getenv("ADMIN_USERNAME", "admin")
    email = os.getenv("ADMIN_EMAIL", "admin@localhost")
    password = os.getenv("ADMIN_PASSWORD")
    if not password:
        print("ADMIN_PASSWORD is required to create the admin user.")
        return

    engine = create_engine_from_settings(get_settings())
    session_factory = create_session_factory(engine)
    try:
        async with session_factory() as db:
            result = await db.execute(select(User).where(User.username == username))
            if result.scalar_one_or_none():
                print(f"User {username} already exists.")
                return

            try:
                await user_service.register_user(
                    db,
                    UserCreate(username=username, email=email, password=password),
                    is_admin=True,
                )
            except ConflictError as e:
                print(f"Could not create admin user: {e.detail}")
                return
            print(f"Successfully created admin user: {username}")
    finally:
        await close_db(engine)

if __name__ == "__main__":
    asyncio.run(create_admin())
