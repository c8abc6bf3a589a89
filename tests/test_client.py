"""Tests for the Azure compute client adapter."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from azure.mgmt.compute.models import OperatingSystemTypes

from conftest import GALLERY_IMAGE_ID, MANAGED_IMAGE_ID, SUBSCRIPTION
from imageref import OS, ImageReference
from imageref.client import AzureComputeClient, MarketplaceImageVersion
from imageref.resource_id import ResourceIdentifier


def make_client():
    """Client with a mocked management client for the test subscription."""
    credential = MagicMock()
    credential.close = AsyncMock()
    client = AzureComputeClient(SUBSCRIPTION, credential=credential)
    compute = MagicMock()
    compute.close = AsyncMock()
    client._clients[SUBSCRIPTION] = compute
    return client, compute, credential


class TestAzureComputeClient:
    """Test mapping from SDK models to image metadata."""

    def test_gallery_image(self):
        client, compute, _ = make_client()
        compute.gallery_images.get = AsyncMock(
            return_value=SimpleNamespace(os_type=OperatingSystemTypes.LINUX)
        )

        metadata = asyncio.run(client.get_gallery_image(ResourceIdentifier(GALLERY_IMAGE_ID)))

        assert metadata.os_type == "Linux"
        compute.gallery_images.get.assert_awaited_once_with(
            "images-rg", "sharedGallery", "ubuntu-fuzz"
        )

    def test_managed_image(self):
        client, compute, _ = make_client()
        os_disk = SimpleNamespace(os_type=OperatingSystemTypes.WINDOWS)
        compute.images.get = AsyncMock(
            return_value=SimpleNamespace(storage_profile=SimpleNamespace(os_disk=os_disk))
        )

        metadata = asyncio.run(client.get_image(ResourceIdentifier(MANAGED_IMAGE_ID)))

        assert metadata.os_type == "Windows"
        compute.images.get.assert_awaited_once_with("images-rg", "win-fuzz")

    def test_managed_image_without_storage_profile(self):
        client, compute, _ = make_client()
        compute.images.get = AsyncMock(return_value=SimpleNamespace(storage_profile=None))

        metadata = asyncio.run(client.get_image(ResourceIdentifier(MANAGED_IMAGE_ID)))

        assert metadata.os_type is None

    def test_list_versions_newest_first(self):
        client, compute, _ = make_client()
        compute.virtual_machine_images.list = AsyncMock(
            return_value=[SimpleNamespace(name="18.04.202401010")]
        )

        versions = asyncio.run(
            client.list_marketplace_image_versions("eastus", "Canonical", "UbuntuServer", "18.04-LTS")
        )

        assert versions == [MarketplaceImageVersion(name="18.04.202401010")]
        compute.virtual_machine_images.list.assert_awaited_once_with(
            "eastus", "Canonical", "UbuntuServer", "18.04-LTS", top=1, orderby="name desc"
        )

    def test_marketplace_image(self):
        client, compute, _ = make_client()
        compute.virtual_machine_images.get = AsyncMock(
            return_value=SimpleNamespace(
                os_disk_image=SimpleNamespace(operating_system=OperatingSystemTypes.LINUX)
            )
        )

        metadata = asyncio.run(
            client.get_marketplace_image("eastus", "Canonical", "UbuntuServer", "18.04-LTS", "1.0")
        )

        assert metadata.operating_system == "Linux"

    def test_resolve_through_client(self):
        """Image references resolve end to end through the adapter."""
        client, compute, _ = make_client()
        compute.gallery_images.get = AsyncMock(
            return_value=SimpleNamespace(os_type=OperatingSystemTypes.WINDOWS)
        )

        result = asyncio.run(ImageReference.must_parse(GALLERY_IMAGE_ID).resolve_os(client, "eastus"))

        assert result.value is OS.WINDOWS

    def test_close_keeps_injected_credential(self):
        """Injected credentials belong to the caller and stay open."""
        client, compute, credential = make_client()

        async def run():
            async with client:
                pass

        asyncio.run(run())

        compute.close.assert_awaited_once()
        credential.close.assert_not_awaited()
        assert client._clients == {}
