"""Store configuration."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

_ENV_PREFIX = "SOPHUB_"

_DEFAULT_EMPLOYEES = [
    "employee1@example.com",
    "employee2@example.com",
    "employee3@example.com",
]


class StoreConfig(BaseModel):
    """
    Runtime configuration for the store and its HTTP surface.

    Every value has a working default so tests and local runs need no
    environment at all.
    """

    app_name: str = Field(
        default="SOP Hub",
        description="Application name shown in API metadata",
    )
    store_timezone: str = Field(
        default="UTC",
        description="IANA timezone used for greetings and due-time display",
    )
    low_stock_threshold: int = Field(
        default=10,
        description="Inventory quantity below which an item counts as low stock",
        ge=0,
        le=10000,
    )
    comment_max_length: int = Field(
        default=5000,
        description="Longest comment text accepted, after trimming",
        ge=1,
        le=50000,
    )
    actor_header: str = Field(
        default="X-Actor-Email",
        description="Request header carrying the acting user's email",
    )
    employees: list[str] = Field(
        default_factory=lambda: list(_DEFAULT_EMPLOYEES),
        description="Emails a ticket may be assigned to",
    )
    seed_sample_data: bool = Field(
        default=True,
        description="Whether create_app seeds the store with sample records",
    )

    def can_assign(self, email: str) -> bool:
        """Empty string (unassigned) is always allowed."""
        return email == "" or email in self.employees


def load_config() -> StoreConfig:
    """
    Build StoreConfig from SOPHUB_* environment variables.

    A .env file in the working directory is loaded first; values already
    in the environment win.
    """
    load_dotenv()

    values: dict = {}
    for name in StoreConfig.model_fields:
        raw = os.getenv(_ENV_PREFIX + name.upper())
        if raw is None:
            continue
        if name == "employees":
            values[name] = [e.strip() for e in raw.split(",") if e.strip()]
        else:
            values[name] = raw

    return StoreConfig(**values)
