"""
eShop Seed Data - Demo identity accounts.

Default credentials for local and demo environments only.
"""

from database.seeds.data.common import AccountData

ADMINISTRATORS_ROLE = "Administrators"
DEFAULT_PASSWORD = "Pass@word1"  # CHANGE THIS IN PRODUCTION

ACCOUNTS: list[AccountData] = [
    {
        "email": "demouser@microsoft.com",
        "password": DEFAULT_PASSWORD,
        "role": None,
        "display_name": "Demo User",
    },
    {
        "email": "admin@microsoft.com",
        "password": DEFAULT_PASSWORD,
        "role": ADMINISTRATORS_ROLE,
        "display_name": "Administrator",
    },
]
