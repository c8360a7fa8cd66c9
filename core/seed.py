"""Sample records used to seed a demo store."""

from datetime import datetime
from uuid import uuid4

from core.models import (
    Bulletin,
    CleaningTask,
    InventoryCategory,
    InventoryItem,
    OriginKind,
    SupplyItem,
    Ticket,
    TicketOrigin,
)
from core.store import StoreSeed
from utils.timezone import days_ago, now_utc, today_at


def _ticket(task: str, description: str, assignee: str, active: bool, now: datetime) -> Ticket:
    return Ticket(
        id=uuid4(),
        task=task,
        description=description,
        assigned_to_email=assignee,
        is_active=active,
        created_at=now,
    )


def _item(category: InventoryCategory, name: str, sku: str, ordered_days_ago: int,
          quantity: int, now: datetime, out_of_stock: bool = False) -> InventoryItem:
    return InventoryItem(
        id=uuid4(),
        category=category,
        name=name,
        sku=sku,
        last_ordered=days_ago(ordered_days_ago, now),
        quantity=quantity,
        out_of_stock=out_of_stock,
    )


def sample_seed(now: datetime | None = None) -> StoreSeed:
    """
    Build a fresh set of sample records.

    Every call returns new objects with new ids, so two stores seeded from
    this function never share state.

    Args:
        now: Reference time for relative timestamps (defaults to now)

    Returns:
        StoreSeed ready for create_store()
    """
    now = now or now_utc()
    created = days_ago(1, now)

    assigned = [
        _ticket("Fix register issue", "Register 2 not scanning barcodes.",
                "employee1@example.com", True, now),
        _ticket("Inventory count update", "Recount electronics section.",
                "employee2@example.com", True, now),
    ]
    unassigned = [
        _ticket("Clean storage area", "Sweep and organize.", "", True, now),
        _ticket("Update sale signage", "Add new promotion signs.", "", True, now),
    ]
    past = [
        _ticket("Restock water bottles", "Completed restock on 4/15/2025",
                "employee3@example.com", False, now),
        _ticket("Repair freezer", "Freezer fixed 4/10/2025",
                "employee1@example.com", False, now),
    ]

    inventory = [
        _item(InventoryCategory.BEVERAGES, "Spring Water 24-pack", "BEV-0101", 2, 24, now),
        _item(InventoryCategory.BEVERAGES, "Cold Brew Concentrate", "BEV-0214", 7, 9, now),
        _item(InventoryCategory.BEVERAGES, "Sparkling Lemonade", "BEV-0330", 14, 0, now,
              out_of_stock=True),
        _item(InventoryCategory.PACKAGING, "Paper Bags (Large)", "PKG-1002", 3, 120, now),
        _item(InventoryCategory.PACKAGING, "Gift Boxes", "PKG-1040", 10, 5, now),
        _item(InventoryCategory.CLEANING, "Glass Cleaner", "CLN-2001", 5, 12, now),
        _item(InventoryCategory.CLEANING, "Floor Degreaser", "CLN-2017", 21, 0, now,
              out_of_stock=True),
        _item(InventoryCategory.MERCHANDISE, "Logo Tote Bag", "MER-3005", 30, 34, now),
    ]

    cleaning = [
        CleaningTask(
            id=uuid4(), title="Floor", schedule="Sweep & mop, end of day",
            done_today=True, last_done=min(today_at(9, 32, now), now),
            completed_by="employee2@example.com", created_at=created,
        ),
        CleaningTask(
            id=uuid4(), title="Countertops", schedule="Disinfect every 2 hrs",
            due_time=today_at(18, 0, now), created_at=created,
        ),
        CleaningTask(
            id=uuid4(), title="Bathroom", schedule="Full clean, open & close",
            done_today=True, last_done=min(today_at(12, 15, now), now),
            completed_by="employee3@example.com", created_at=created,
        ),
    ]

    maintenance_origin = TicketOrigin(kind=OriginKind.CLEANING)
    issues = [
        Ticket(id=uuid4(), task=task, description=description, assigned_to_email="",
               is_active=True, origin=maintenance_origin, created_at=created)
        for task, description in [
            ("Leaking toilet pipe", "Small puddle behind bathroom toilet."),
            ("Flickering ceiling light", "Front register, bulb or ballast?"),
            ("HVAC not cooling", "Thermostat 72 °F, store holding 78 °F."),
        ]
    ]

    supplies = [
        SupplyItem(id=uuid4(), name=name, usage=usage)
        for name, usage in [
            ("Windex", "Glass & window cleaner"),
            ("Multi-Surface Spray", "Counters & tables"),
            ("Disinfectant Wipes", "Quick sanitizing / POS screens"),
            ("Floor Degreaser", "Back-room tile & spills"),
        ]
    ]

    bulletins = [
        Bulletin(id=uuid4(), title=title, body=body, posted_at=now)
        for title, body in [
            ("Weekend Promo", "20% off starts Friday, update signage."),
            ("New Closing SOP", "Review the updated checklist before tonight."),
            ("Safety Training", "All staff must complete the module by 5/15."),
        ]
    ]

    return StoreSeed(
        assigned=assigned,
        unassigned=unassigned,
        past=past,
        inventory=inventory,
        cleaning=cleaning,
        spawned={OriginKind.CLEANING: issues},
        supplies=supplies,
        bulletins=bulletins,
    )
