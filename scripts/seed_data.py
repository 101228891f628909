#!/usr/bin/env python3
"""Seed a superadmin, a demo school with its login settings, and a school admin.

Usage: python scripts/seed_data.py   (reads DATABASE_URL etc. from the environment / .env)
"""
import asyncio
import logging

from sqlalchemy import select

from idcard_api.core.config import get_settings
from idcard_api.core.database import build_database
from idcard_api.core.logging import setup_logging
from idcard_api.core.security import hash_password
from idcard_api.core.tenancy import Role
from idcard_api.models import AllowedLogin, School, User

logger = logging.getLogger("seed_data")

SUPERADMIN = {"name": "Super Admin", "email": "superadmin@idcard.edu", "username": "superadmin", "password": "admin123"}
SCHOOL = {"name": "Demo Public School", "address": "1 Campus Road", "contact_email": "office@demopublic.edu"}
SCHOOL_ADMIN = {"name": "Demo Admin", "email": "admin@demopublic.edu", "username": "demoadmin", "password": "admin123"}


async def get_or_create_user(db, account, role, school_id, rounds):
    existing = (await db.execute(select(User).where(User.email == account["email"]))).scalar_one_or_none()
    if existing:
        logger.info(f"User {account['email']} already exists")
        return existing

    user = User(
        name=account["name"],
        email=account["email"],
        username=account["username"],
        password_hash=hash_password(account["password"], rounds),
        role=role.value,
        school_id=school_id,
        status="active",
    )
    db.add(user)
    logger.info(f"Created {role.value} {account['email']} / {account['password']}")
    return user


async def seed():
    settings = get_settings()
    setup_logging(settings)
    database = build_database(settings)

    try:
        await database.create_all()
        async with database.session() as db:
            school = (await db.execute(select(School).where(School.name == SCHOOL["name"]))).scalar_one_or_none()
            if school is None:
                school = School(**SCHOOL, status="active")
                db.add(school)
                await db.flush()
                db.add(AllowedLogin(school_id=school.id, allow_school_admin=True, allow_teacher=True))
                logger.info(f"Created school {school.name}")

            await get_or_create_user(db, SUPERADMIN, Role.SUPERADMIN, None, settings.bcrypt_rounds)
            await get_or_create_user(db, SCHOOL_ADMIN, Role.SCHOOLADMIN, school.id, settings.bcrypt_rounds)
            await db.commit()
    finally:
        await database.dispose()

    logger.info("Seeding complete")


if __name__ == "__main__":
    asyncio.run(seed())
