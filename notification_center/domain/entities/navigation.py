"""Domain entity describing where a notification click should lead."""

from __future__ import annotations

from dataclasses import dataclass, fields

# Attribute name -> query parameter name, in wire order.
QUERY_PARAMETERS: tuple[tuple[str, str], ...] = (
    ("tab", "tab"),
    ("task_id", "taskId"),
    ("customer_id", "customerId"),
    ("partner_id", "partnerId"),
    ("renewal_id", "renewalId"),
)


@dataclass(frozen=True)
class NavigationTarget:
    """Logical view plus optional entity focus inside the dashboard shell."""

    tab: str | None = None
    task_id: str | None = None
    customer_id: str | None = None
    partner_id: str | None = None
    renewal_id: str | None = None

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when the target carries no navigation information."""

        return all(getattr(self, item.name) is None for item in fields(self))

    def to_query_params(self) -> dict[str, str]:
        """Return the set fields keyed by their query parameter names."""

        params: dict[str, str] = {}
        for attribute, parameter in QUERY_PARAMETERS:
            value = getattr(self, attribute)
            if value:
                params[parameter] = value
        return params


__all__ = ["NavigationTarget", "QUERY_PARAMETERS"]
