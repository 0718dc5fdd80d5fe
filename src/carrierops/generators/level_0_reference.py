"""
Level 0 Generator: Reference data with no FK dependencies.

Tables generated:
- plans
- regions
- device_classes
- org_units
- rates
- features
- ticket_status_codes

Level 0 consumes no draws from the RandomSource; its content is fixed by the
catalogs in carrierops.constants.
"""

from .base import BaseLevelGenerator
from ..constants import DEVICE_CLASSES, FEATURES, ORG_UNITS, PLANS, REGIONS, TICKET_STATUSES
from ..rating import rate_plan


class Level0Generator(BaseLevelGenerator):
    """
    Generate Level 0 reference data.

    Every later level references this data (regions by code, features and
    ticket status codes by key).
    """

    LEVEL = 0

    def generate(self) -> None:
        """
        Generate all Level 0 tables.

        Tables: plans, regions, device_classes, org_units, rates, features,
                ticket_status_codes
        """
        print("  Level 0: Reference data (plans, regions, rates, features...)")

        self._generate_plans()
        self._generate_regions()
        self._generate_device_classes()
        self._generate_org_units()
        self._generate_rates()
        self._generate_features()
        self._generate_ticket_status_codes()

        self.ctx.generated_levels.add(self.LEVEL)
        print(
            f"    Generated: {len(self.data['plans'])} plans, "
            f"{len(self.data['regions'])} regions, "
            f"{len(self.data['rates'])} rates, "
            f"{len(self.data['features'])} features, "
            f"{len(self.data['org_units'])} org units"
        )

    def _generate_plans(self) -> None:
        """Generate plans table."""
        for plan in PLANS:
            self.data["plans"].append(
                {
                    "planId": self.ctx.allocate("plans"),
                    "code": plan["code"],
                    "name": plan["name"],
                }
            )

    def _generate_regions(self) -> None:
        """Generate regions table."""
        for region in REGIONS:
            self.data["regions"].append(
                {"regionId": self.ctx.allocate("regions"), "code": region["code"]}
            )

    def _generate_device_classes(self) -> None:
        """Generate device_classes table."""
        for device_class in DEVICE_CLASSES:
            self.data["device_classes"].append(
                {
                    "deviceClassId": self.ctx.allocate("device_classes"),
                    "code": device_class["code"],
                }
            )

    def _generate_org_units(self) -> None:
        """Generate org_units table (two roots, each with children)."""
        unit_ids: list[int] = []
        for unit in ORG_UNITS:
            org_unit_id = self.ctx.allocate("org_units")
            unit_ids.append(org_unit_id)
            parent = unit["parent"]
            self.data["org_units"].append(
                {
                    "orgUnitId": org_unit_id,
                    "name": unit["name"],
                    "parentOrgUnitId": unit_ids[parent] if parent is not None else None,
                }
            )

    def _generate_rates(self) -> None:
        """Generate rates: the full plan x region x device class product."""
        for plan in self.data["plans"]:
            for region in self.data["regions"]:
                for device_class in self.data["device_classes"]:
                    self.data["rates"].append(
                        {
                            "planId": plan["planId"],
                            "regionId": region["regionId"],
                            "deviceClassId": device_class["deviceClassId"],
                            "rateCents": rate_plan(
                                plan["code"], region["code"], device_class["code"]
                            ),
                        }
                    )

    def _generate_features(self) -> None:
        """Generate features catalog."""
        for feature in FEATURES:
            self.data["features"].append(
                {
                    "featureId": self.ctx.allocate("features"),
                    "code": feature["code"],
                    "name": feature["name"],
                }
            )

    def _generate_ticket_status_codes(self) -> None:
        """Generate ticket_status_codes lookup (keyed by code)."""
        for status in TICKET_STATUSES:
            self.data["ticket_status_codes"].append(
                {"code": status["code"], "description": status["description"]}
            )
