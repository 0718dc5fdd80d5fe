"""
Level 1-3 Generator: Accounts, subscribers and devices.

Level 1 Tables:
- accounts (preset.accounts)

Level 2 Tables:
- subscribers (subs_per_account_min..max per account)
- subscriber_profiles (1:1 with subscribers)

Level 3 Tables:
- devices (1 per subscriber)
"""

from datetime import datetime, timedelta

from .base import BaseLevelGenerator
from ..constants import (
    ACCOUNT_NAMES,
    DEVICE_MODELS,
    FIRST_NAMES,
    IMEI_PREFIX,
    LAST_NAMES,
    MSISDN_PREFIX,
    PROBABILITIES,
    REGION_CODES,
)
from ..models import iso


class Level1Generator(BaseLevelGenerator):
    """
    Generate Level 1 accounts.

    One draw per account (billing region); everything else is positional.
    """

    LEVEL = 1

    def generate(self) -> None:
        """Generate accounts."""
        print("  Level 1: Accounts")
        start = self.ctx.window_start(extra_days=5)

        for i in range(self.preset.accounts):
            account_id = self.ctx.allocate("accounts")
            self.data["accounts"].append(
                {
                    "accountId": account_id,
                    "accountNumber": f"A-{account_id}",
                    "name": ACCOUNT_NAMES[i % len(ACCOUNT_NAMES)],
                    "billingRegionCode": self.rng.choice(REGION_CODES),
                    "status": "active",
                    "createdAt": iso(start + timedelta(hours=2 * i)),
                }
            )

        self.ctx.generated_levels.add(self.LEVEL)
        print(f"    Generated: {len(self.data['accounts'])} accounts")


class Level2Generator(BaseLevelGenerator):
    """
    Generate Level 2 subscribers and their 1:1 profiles.

    Draw order per subscriber: status, first name, last name, dob
    (year, month, day), updatedAt offset, SSN last 4, marketing opt-in,
    paperless billing.
    """

    LEVEL = 2

    def generate(self) -> None:
        """Generate subscribers and subscriber_profiles."""
        print("  Level 2: Subscribers and profiles")
        created_base = self.ctx.window_start(extra_days=3)
        updated_base = self.ctx.window_start()

        for account in self.data["accounts"]:
            count = self.rng.int_between(
                self.preset.subs_per_account_min, self.preset.subs_per_account_max
            )
            for _ in range(count):
                subscriber_id = self.ctx.allocate("subscribers")
                created_at = created_base + timedelta(minutes=15 * (subscriber_id % 20))
                self.data["subscribers"].append(
                    {
                        "subscriberId": subscriber_id,
                        "accountId": account["accountId"],
                        "msisdn": f"{MSISDN_PREFIX}{subscriber_id % 10000:04d}",
                        "status": (
                            "suspended"
                            if self.rng.chance(PROBABILITIES["subscriber_suspended"])
                            else "active"
                        ),
                        "createdAt": iso(created_at),
                    }
                )
                self.data["subscriber_profiles"].append(
                    self._build_profile(subscriber_id, updated_base)
                )

        self.ctx.generated_levels.add(self.LEVEL)
        print(
            f"    Generated: {len(self.data['subscribers'])} subscribers, "
            f"{len(self.data['subscriber_profiles'])} profiles"
        )

    def _build_profile(self, subscriber_id: int, updated_base: datetime) -> dict:
        rng = self.rng
        first = rng.choice(FIRST_NAMES)
        last = rng.choice(LAST_NAMES)
        year = rng.int_between(1980, 1998)
        month = rng.int_between(1, 12)
        day = rng.int_between(1, 28)
        updated_at = updated_base + timedelta(hours=rng.int_between(1, 12))
        ssn_last4 = rng.int_between(0, 9999)

        return {
            "subscriberId": subscriber_id,
            "firstName": first,
            "lastName": last,
            "email": f"{first.lower()}.{last.lower()}@example.com",
            "dob": f"{year}-{month:02d}-{day:02d}",
            "piiLast4Ssn": f"{ssn_last4:04d}",
            "preferences": {
                "marketingOptIn": rng.chance(PROBABILITIES["marketing_opt_in"]),
                "paperlessBilling": rng.chance(PROBABILITIES["paperless_billing"]),
            },
            "updatedAt": iso(updated_at),
        }


class Level3Generator(BaseLevelGenerator):
    """Generate Level 3 devices (exactly one per subscriber)."""

    LEVEL = 3

    def generate(self) -> None:
        """Generate devices."""
        print("  Level 3: Devices")

        for subscriber in self.data["subscribers"]:
            device_id = self.ctx.allocate("devices")
            created_at = datetime.fromisoformat(
                subscriber["createdAt"].replace("Z", "+00:00")
            ) + timedelta(minutes=30)
            self.data["devices"].append(
                {
                    "deviceId": device_id,
                    "subscriberId": subscriber["subscriberId"],
                    "imei": f"{IMEI_PREFIX}{device_id:06d}",
                    "model": self.rng.choice(DEVICE_MODELS),
                    "createdAt": iso(created_at),
                }
            )

        self.ctx.generated_levels.add(self.LEVEL)
        print(f"    Generated: {len(self.data['devices'])} devices")
