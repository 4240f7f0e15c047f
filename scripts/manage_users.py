# scripts/manage_users.py

import asyncio
import argparse
from sqlalchemy.future import select
from menudujour.db import async_session
from menudujour.crud.restaurant import initialize_restaurant
from menudujour.models.user import User


async def create_user(email, full_name=None, restaurant_name=None):
    async with async_session() as session:
        result = await session.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user:
            print(f"⚠️  User '{email}' already exists. Skipping creation.")
        else:
            user = User(email=email, full_name=full_name)
            session.add(user)
            await session.commit()
            print(f"✅ Created: {email}")

        # 🏢 Optionally create + seed the user's restaurant
        if restaurant_name:
            created = await initialize_restaurant(session, user, restaurant_name)
            if created.ok:
                print(f"🏢 Restaurant: {created.data.name} → /menu/{created.data.slug}")
            else:
                print(f"❌ {created.error}")


async def delete_user(email):
    async with async_session() as session:
        result = await session.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user:
            await session.delete(user)
            await session.commit()
            print(f"🗑️  Deleted user: {email}")
        else:
            print(f"⚠️  No user found with email: {email}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Manage Menu du jour users")
    parser.add_argument("--create", action="store_true", help="Create a user")
    parser.add_argument("--delete", action="store_true", help="Delete a user")
    parser.add_argument("--email", type=str, help="User email")
    parser.add_argument("--name", type=str, help="Full name of the user")
    parser.add_argument("--restaurant", type=str, help="Create and seed a restaurant owned by the user")

    args = parser.parse_args()

    if args.create and args.email:
        asyncio.run(create_user(args.email, full_name=args.name, restaurant_name=args.restaurant))
    elif args.delete and args.email:
        asyncio.run(delete_user(args.email))
    else:
        print("❗ Usage:")
        print('  python -m scripts.manage_users --create --email chef@example.com --restaurant "Chez Marcel"')
        print("  python -m scripts.manage_users --delete --email chef@example.com")
