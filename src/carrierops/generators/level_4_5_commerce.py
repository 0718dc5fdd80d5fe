"""
Level 4-5 Generator: Orders and feature subscriptions.

Level 4 Tables:
- orders (orders_per_account_min..max per account)
- order_items (items_per_order_min..max distinct SKUs per order)

Level 5 Tables:
- subscriber_features (1-2 distinct features per subscriber, M:N bridge)
- subscriber_feature_state (~45% of bridge rows, associative with attributes)
"""

from datetime import timedelta

from .base import BaseLevelGenerator
from ..constants import (
    FEATURE_SOURCES,
    ORDER_SKUS,
    ORDER_STATUSES,
    PROBABILITIES,
    PROVISIONING_STATES,
)
from ..models import iso


class Level4Generator(BaseLevelGenerator):
    """
    Generate Level 4 orders and order items.

    Items are a prefix of the shuffled SKU catalog, so SKUs never repeat
    within an order and item count never exceeds the catalog size.
    """

    LEVEL = 4

    def generate(self) -> None:
        """Generate orders and order_items."""
        print("  Level 4: Orders and order items")
        created_base = self.ctx.window_start()

        for account in self.data["accounts"]:
            count = self.rng.int_between(
                self.preset.orders_per_account_min, self.preset.orders_per_account_max
            )
            for _ in range(count):
                self._generate_order(account["accountId"], created_base)

        self.ctx.generated_levels.add(self.LEVEL)
        print(
            f"    Generated: {len(self.data['orders'])} orders, "
            f"{len(self.data['order_items'])} items"
        )

    def _generate_order(self, account_id: int, created_base) -> None:
        order_id = self.ctx.allocate("orders")
        status = self.rng.choice(ORDER_STATUSES)
        created_at = created_base + timedelta(hours=self.rng.int_between(1, 36))
        self.data["orders"].append(
            {
                "orderId": order_id,
                "accountId": account_id,
                "status": status,
                "createdAt": iso(created_at),
            }
        )

        item_count = self.rng.int_between(
            self.preset.items_per_order_min, self.preset.items_per_order_max
        )
        for sku in self.rng.shuffle(ORDER_SKUS)[:item_count]:
            self.data["order_items"].append(
                {
                    "orderItemId": self.ctx.allocate("order_items"),
                    "orderId": order_id,
                    "sku": sku["sku"],
                    "qty": 1,
                    "priceCents": sku["price_cents"],
                }
            )


class Level5Generator(BaseLevelGenerator):
    """
    Generate Level 5 feature subscriptions.

    The bridge is built for every subscriber first; state rows are then drawn
    over the bridge in generation order, so every state row's
    (subscriberId, featureId) pair exists in subscriber_features.
    """

    LEVEL = 5

    def generate(self) -> None:
        """Generate subscriber_features and subscriber_feature_state."""
        print("  Level 5: Subscriber features and provisioning state")

        self._generate_subscriber_features()
        self._generate_feature_state()

        self.ctx.generated_levels.add(self.LEVEL)
        print(
            f"    Generated: {len(self.data['subscriber_features'])} subscriber features, "
            f"{len(self.data['subscriber_feature_state'])} state rows"
        )

    def _generate_subscriber_features(self) -> None:
        """Pick 1-2 distinct features per subscriber from a shuffled catalog."""
        features = self.data["features"]
        for subscriber in self.data["subscribers"]:
            count = self.rng.int_between(1, 2)
            for feature in self.rng.shuffle(features)[:count]:
                self.data["subscriber_features"].append(
                    {
                        "subscriberId": subscriber["subscriberId"],
                        "featureId": feature["featureId"],
                    }
                )

    def _generate_feature_state(self) -> None:
        """Attach a provisioning state row to ~45% of bridge rows."""
        rng = self.rng
        effective_base = self.ctx.window_start(extra_days=1)
        skip_below = PROBABILITIES["feature_state_skip"]

        for link in self.data["subscriber_features"]:
            if rng.random() < skip_below:
                continue

            effective_from = effective_base + timedelta(hours=rng.int_between(1, 48))
            if rng.chance(PROBABILITIES["provisioning_active"]):
                state = "active"
            else:
                state = rng.choice(PROVISIONING_STATES)
            source = rng.choice(FEATURE_SOURCES)
            effective_to = (
                iso(effective_from + timedelta(days=3))
                if rng.chance(PROBABILITIES["feature_state_expires"])
                else None
            )

            self.data["subscriber_feature_state"].append(
                {
                    "subscriberFeatureStateId": self.ctx.allocate(
                        "subscriber_feature_state"
                    ),
                    "subscriberId": link["subscriberId"],
                    "featureId": link["featureId"],
                    "effectiveFrom": iso(effective_from),
                    "effectiveTo": effective_to,
                    "provisioningState": state,
                    "source": source,
                }
            )
