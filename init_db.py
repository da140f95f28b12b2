"""
Скрипт для инициализации базы данных.

Создаёт все таблицы напрямую через SQLAlchemy и первого администратора
(ADMIN_EMAIL из настроек). Его UUID нужно передавать в заголовке X-User-ID.
"""

import asyncio

from task_tracker.core.config import settings
from task_tracker.core.database import AsyncSessionLocal, init_db
from task_tracker.models import User
from task_tracker.repositories import UserRepository


async def main():
    """Создать все таблицы и администратора."""
    print("Создание таблиц...")
    await init_db()
    print("✓ Таблицы созданы успешно!")

    async with AsyncSessionLocal() as session:
        repo = UserRepository(session)
        admin = await repo.get_by_email(settings.ADMIN_EMAIL)
        if admin is None:
            admin = await repo.insert(
                User(email=settings.ADMIN_EMAIL, first_name="Admin", last_name="Admin", is_admin=True)
            )
            await session.commit()
            print(f"✓ Администратор создан: {admin.email}")
        print(f"X-User-ID: {admin.id}")


if __name__ == "__main__":
    asyncio.run(main())
