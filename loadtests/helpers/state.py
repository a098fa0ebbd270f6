"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state; nothing is shared across
users. Journeys record ids returned by earlier steps so later steps can
reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks a single simulated customer from signup to their orders."""

    username: str | None = None
    password: str | None = None
    token: str | None = None
    product_ids: list[str] = field(default_factory=list)
    order_numbers: list[str] = field(default_factory=list)

    @property
    def auth_headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}


@dataclass
class ContentionState:
    """Tracks outcomes for buyers racing for the same product."""

    product_id: str | None = None
    placed: int = 0
    rejected: int = 0
