"""
eShop Account Seeder.

Seeds the demo identity accounts. Accounts have no ordering dependency on
the catalog groups.
"""

import logging

from passlib.hash import bcrypt

from database.models import UserAccount
from database.seeds.data.common import GROUP_ACCOUNTS
from database.seeds.data.dataset import SeedDataset
from database.seeds.seed_utils import deterministic_account_uuid
from database.seeds.seeders.base import BaseSeeder

logger = logging.getLogger(__name__)


class AccountSeeder(BaseSeeder):
    """Seeder for demo user accounts (email is the natural key)."""

    group = GROUP_ACCOUNTS
    entity_type = "Account"

    async def seed(self, dataset: SeedDataset) -> int:
        for account in dataset.accounts:
            email = account["email"].lower()

            existing = await self.find_by_key(UserAccount, UserAccount.email, email)
            if existing is not None:
                self.log_skipped(email)
                continue

            # Hash only for rows that are actually inserted
            self.session.add(
                UserAccount(
                    id=deterministic_account_uuid(email),
                    email=email,
                    password_hash=bcrypt.hash(account["password"]),
                    role=account["role"],
                    display_name=account["display_name"],
                    is_active=True,
                )
            )
            self.log_created(email)

            if account["role"]:
                logger.info(f"  Account {email} assigned role {account['role']}")

        await self.session.flush()
        self.log_summary()
        return self.stats["created"]
