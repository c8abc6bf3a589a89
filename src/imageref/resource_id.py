"""Azure Resource Manager resource identifiers.

Thin value type over ``azure.mgmt.core.tools`` that keeps the original
string form and exposes the fully-qualified resource type, e.g.
``Microsoft.Compute/galleries/images``.
"""

from dataclasses import dataclass, field
from typing import Any

from azure.mgmt.core.tools import is_valid_resource_id, parse_resource_id

GALLERY_IMAGE_RESOURCE_TYPE = "Microsoft.Compute/galleries/images"
IMAGE_RESOURCE_TYPE = "Microsoft.Compute/images"


@dataclass(frozen=True)
class ResourceIdentifier:
    """A validated ARM resource identifier.

    Equality and hashing use the identifier string only.
    """

    value: str
    _parts: dict[str, Any] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self):
        if not isinstance(self.value, str) or not is_valid_resource_id(self.value):
            raise ValueError(f"Invalid Azure resource identifier: {self.value!r}")
        object.__setattr__(self, "_parts", parse_resource_id(self.value))

    @classmethod
    def parse(cls, raw: str) -> "ResourceIdentifier":
        """Parse an ARM identifier.

        Raises:
            ValueError: If ``raw`` is not a well-formed ARM identifier
        """
        return cls(raw)

    @property
    def subscription_id(self) -> str:
        return self._parts["subscription"]

    @property
    def resource_group(self) -> str | None:
        return self._parts.get("resource_group")

    @property
    def name(self) -> str:
        """Name of the leaf resource."""
        return self.names[-1]

    @property
    def names(self) -> list[str]:
        """Resource names from the top-level resource down to the leaf."""
        parts = self._parts
        if "namespace" not in parts:
            return [parts.get("resource_group") or parts["subscription"]]
        names = [parts["name"]]
        for i in range(1, (parts.get("last_child_num") or 0) + 1):
            names.append(parts[f"child_name_{i}"])
        return names

    @property
    def resource_type(self) -> str:
        """Fully-qualified resource type, e.g. ``Microsoft.Compute/images``."""
        parts = self._parts
        if "namespace" not in parts:
            if "resource_group" in parts:
                return "Microsoft.Resources/resourceGroups"
            return "Microsoft.Resources/subscriptions"

        segments = [parts["namespace"], parts["type"]]
        for i in range(1, (parts.get("last_child_num") or 0) + 1):
            # Extension resources restart the type under their own namespace
            child_namespace = parts.get(f"child_namespace_{i}")
            if child_namespace:
                segments = [child_namespace]
            segments.append(parts[f"child_type_{i}"])
        return "/".join(segments)

    def is_type(self, resource_type: str) -> bool:
        """Case-insensitive resource type comparison."""
        return self.resource_type.lower() == resource_type.lower()

    def __str__(self) -> str:
        return self.value
