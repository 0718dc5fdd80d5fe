"""
Level 6-7 Generator: Customer care.

Level 6 Tables:
- tickets (tickets_per_subscriber_min..max per subscriber)

Level 7 Tables:
- notes (polymorphic: up to 4 subscribers, 3 orders, 4 tickets)
"""

from datetime import timedelta

from .base import BaseLevelGenerator
from ..constants import (
    NOTE_AUTHORS,
    NOTE_PHRASES,
    NOTE_TARGET_LIMITS,
    TICKET_SUMMARIES,
)
from ..models import NoteRef, NoteTarget, iso


class Level6Generator(BaseLevelGenerator):
    """
    Generate Level 6 tickets.

    closedAt is set if and only if the ticket is RESOLVED, and always falls
    15-180 minutes after openedAt.
    """

    LEVEL = 6

    def generate(self) -> None:
        """Generate tickets."""
        print("  Level 6: Tickets")
        rng = self.rng
        opened_base = self.ctx.window_start()
        status_codes = self.data["ticket_status_codes"]

        for subscriber in self.data["subscribers"]:
            count = rng.int_between(
                self.preset.tickets_per_subscriber_min,
                self.preset.tickets_per_subscriber_max,
            )
            for _ in range(count):
                ticket_id = self.ctx.allocate("tickets")
                status_code = rng.choice(status_codes)["code"]
                opened_at = opened_base + timedelta(hours=rng.int_between(1, 48))
                closed_at = None
                if status_code == "RESOLVED":
                    closed_at = iso(
                        opened_at + timedelta(minutes=rng.int_between(15, 180))
                    )
                self.data["tickets"].append(
                    {
                        "ticketId": ticket_id,
                        "subscriberId": subscriber["subscriberId"],
                        "statusCode": status_code,
                        "openedAt": iso(opened_at),
                        "closedAt": closed_at,
                        "summary": rng.choice(TICKET_SUMMARIES),
                    }
                )

        self.ctx.generated_levels.add(self.LEVEL)
        print(f"    Generated: {len(self.data['tickets'])} tickets")


class Level7Generator(BaseLevelGenerator):
    """
    Generate Level 7 notes.

    Targets are drawn by shuffling each target collection independently and
    taking a prefix; notes are then written for subscriber targets, order
    targets and ticket targets in that order.
    """

    LEVEL = 7

    def generate(self) -> None:
        """Generate notes."""
        print("  Level 7: Notes")
        rng = self.rng
        created_base = self.ctx.window_start()

        for ref in self.select_targets():
            created_at = created_base + timedelta(hours=rng.int_between(1, 48))
            note = {"noteId": self.ctx.allocate("notes")}
            note.update(ref.as_fields())
            note["author"] = rng.choice(NOTE_AUTHORS)
            note["body"] = (
                f"Note on {ref.target.value} {ref.ref_id}: {rng.choice(NOTE_PHRASES)}"
            )
            note["createdAt"] = iso(created_at)
            self.data["notes"].append(note)

        self.ctx.generated_levels.add(self.LEVEL)
        print(f"    Generated: {len(self.data['notes'])} notes")

    def select_targets(self) -> list[NoteRef]:
        """Draw the note targets (one shuffle per target type)."""
        refs: list[NoteRef] = []
        for target in NoteTarget:
            rows = self.data[target.collection]
            limit = min(NOTE_TARGET_LIMITS[target.value], len(rows))
            for row in self.rng.shuffle(rows)[:limit]:
                refs.append(NoteRef(target, row[target.id_field]))
        return refs
