"""Cloud client used to look up image metadata.

``ComputeMetadataClient`` is the narrow read-only surface image references
need. ``AzureComputeClient`` implements it on the async Compute management
SDK; tests substitute in-memory fakes.
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from .resource_id import ResourceIdentifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GalleryImageMetadata:
    os_type: str | None


@dataclass(frozen=True)
class ManagedImageMetadata:
    """Managed image metadata; ``os_type`` comes from the storage profile OS disk."""

    os_type: str | None


@dataclass(frozen=True)
class MarketplaceImageVersion:
    name: str


@dataclass(frozen=True)
class MarketplaceImageMetadata:
    """Marketplace image metadata; ``operating_system`` comes from the OS disk image."""

    operating_system: str | None


class ComputeMetadataClient(Protocol):
    """Read operations image references need from the cloud.

    Implementations raise ``azure.core.exceptions.AzureError`` subclasses
    on transport or API failures.
    """

    async def get_gallery_image(self, identifier: ResourceIdentifier) -> GalleryImageMetadata:
        ...

    async def get_image(self, identifier: ResourceIdentifier) -> ManagedImageMetadata:
        ...

    async def list_marketplace_image_versions(
        self, region: str, publisher: str, offer: str, sku: str, top: int = 1
    ) -> list[MarketplaceImageVersion]:
        ...

    async def get_marketplace_image(
        self, region: str, publisher: str, offer: str, sku: str, version: str
    ) -> MarketplaceImageMetadata:
        ...


def _enum_value(value: Any) -> str | None:
    """SDK enums are str subclasses whose str() is the member name."""
    if value is None:
        return None
    return getattr(value, "value", value)


class AzureComputeClient:
    """ComputeMetadataClient backed by ``azure-mgmt-compute``.

    One management client is created per subscription on first use, since
    gallery and managed images may live outside the default subscription.
    Use as an async context manager, or call ``close()``.
    """

    def __init__(self, subscription_id: str, credential: Any = None):
        """Initialize the client.

        Args:
            subscription_id: Default subscription, used for marketplace queries
            credential: Async token credential (defaults to DefaultAzureCredential)
        """
        self.subscription_id = subscription_id
        self._owns_credential = credential is None
        if credential is None:
            from azure.identity.aio import DefaultAzureCredential

            credential = DefaultAzureCredential()
        self._credential = credential
        self._clients: dict[str, Any] = {}

    def _compute(self, subscription_id: str | None = None):
        from azure.mgmt.compute.aio import ComputeManagementClient

        subscription_id = subscription_id or self.subscription_id
        if subscription_id not in self._clients:
            logger.debug(f"Creating compute client for subscription {subscription_id}")
            self._clients[subscription_id] = ComputeManagementClient(
                self._credential, subscription_id
            )
        return self._clients[subscription_id]

    async def get_gallery_image(self, identifier: ResourceIdentifier) -> GalleryImageMetadata:
        gallery_name, image_name = identifier.names[-2:]
        image = await self._compute(identifier.subscription_id).gallery_images.get(
            identifier.resource_group, gallery_name, image_name
        )
        return GalleryImageMetadata(os_type=_enum_value(image.os_type))

    async def get_image(self, identifier: ResourceIdentifier) -> ManagedImageMetadata:
        image = await self._compute(identifier.subscription_id).images.get(
            identifier.resource_group, identifier.name
        )
        os_disk = image.storage_profile.os_disk if image.storage_profile else None
        return ManagedImageMetadata(os_type=_enum_value(os_disk.os_type) if os_disk else None)

    async def list_marketplace_image_versions(
        self, region: str, publisher: str, offer: str, sku: str, top: int = 1
    ) -> list[MarketplaceImageVersion]:
        images = await self._compute().virtual_machine_images.list(
            region, publisher, offer, sku, top=top, orderby="name desc"
        )
        return [MarketplaceImageVersion(name=image.name) for image in images]

    async def get_marketplace_image(
        self, region: str, publisher: str, offer: str, sku: str, version: str
    ) -> MarketplaceImageMetadata:
        image = await self._compute().virtual_machine_images.get(
            region, publisher, offer, sku, version
        )
        os_disk_image = image.os_disk_image
        return MarketplaceImageMetadata(
            operating_system=_enum_value(os_disk_image.operating_system) if os_disk_image else None
        )

    async def close(self) -> None:
        for client in self._clients.values():
            await client.close()
        self._clients.clear()
        if self._owns_credential:
            await self._credential.close()

    async def __aenter__(self) -> "AzureComputeClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
