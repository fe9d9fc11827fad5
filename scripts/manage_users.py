# scripts/manage_users.py
#
# Explicit bootstrap for accounts. No admin ships with the schema; create one:
#   python scripts/manage_users.py create-admin --name "Canteen Admin" --email admin@example.com
import argparse
import asyncio
import getpass
import sys

from canteen.core.errors import ValidationError
from canteen.crud import user as user_crud
from canteen.db import async_session, create_db_and_tables
from canteen.models.user import UserRole


async def create_account(full_name: str, email: str, password: str, role: UserRole):
    await create_db_and_tables()
    async with async_session() as session:
        try:
            user = await user_crud.create_user(session, full_name, email, password, role)
        except ValidationError as exc:
            print(f"⚠️  {exc.message}")
            return 1
        print(f"✅ Created: {user.full_name} <{user.email}> ({user.role.value})")
        return 0


async def delete_account(email: str):
    async with async_session() as session:
        user = await user_crud.get_user_by_email(session, email)
        if not user:
            print(f"⚠️  No user found with email: {email}")
            return 1
        await user_crud.delete_user(session, user.id)
        print(f"🗑️  Deleted user: {email}")
        return 0


def _read_password(args) -> str:
    if args.password:
        return args.password
    first = getpass.getpass("Password: ")
    if first != getpass.getpass("Repeat password: "):
        print("⚠️  Passwords do not match")
        sys.exit(1)
    return first


def main(argv=None):
    parser = argparse.ArgumentParser(description="Manage canteen portal accounts")
    sub = parser.add_subparsers(dest="command", required=True)

    for command in ("create-admin", "create-customer"):
        p = sub.add_parser(command)
        p.add_argument("--name", required=True)
        p.add_argument("--email", required=True)
        p.add_argument("--password", help="prompted for when omitted")

    p_delete = sub.add_parser("delete")
    p_delete.add_argument("--email", required=True)

    args = parser.parse_args(argv)

    if args.command == "delete":
        return asyncio.run(delete_account(args.email))

    role = UserRole.admin if args.command == "create-admin" else UserRole.customer
    return asyncio.run(create_account(args.name, args.email, _read_password(args), role))


if __name__ == "__main__":
    sys.exit(main())
