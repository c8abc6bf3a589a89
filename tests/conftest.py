"""Test configuration and shared fixtures for imageref tests."""

import pytest

from imageref.client import (
    GalleryImageMetadata,
    ManagedImageMetadata,
    MarketplaceImageMetadata,
    MarketplaceImageVersion,
)

SUBSCRIPTION = "00000000-0000-0000-0000-000000000000"
GALLERY_IMAGE_ID = (
    f"/subscriptions/{SUBSCRIPTION}/resourceGroups/images-rg"
    "/providers/Microsoft.Compute/galleries/sharedGallery/images/ubuntu-fuzz"
)
MANAGED_IMAGE_ID = (
    f"/subscriptions/{SUBSCRIPTION}/resourceGroups/images-rg"
    "/providers/Microsoft.Compute/images/win-fuzz"
)
UBUNTU_URN = "Canonical:UbuntuServer:18.04-LTS:latest"


class FakeComputeClient:
    """In-memory ComputeMetadataClient that records every call."""

    def __init__(
        self,
        os_type: str | None = "Linux",
        versions: list[str] | None = None,
        error: Exception | None = None,
    ):
        self.os_type = os_type
        self.versions = ["18.04.202401010"] if versions is None else versions
        self.error = error
        self.calls = []

    def _record(self, *call):
        self.calls.append(call)
        if self.error is not None:
            raise self.error

    async def get_gallery_image(self, identifier):
        self._record("get_gallery_image", str(identifier))
        return GalleryImageMetadata(os_type=self.os_type)

    async def get_image(self, identifier):
        self._record("get_image", str(identifier))
        return ManagedImageMetadata(os_type=self.os_type)

    async def list_marketplace_image_versions(self, region, publisher, offer, sku, top=1):
        self._record("list_marketplace_image_versions", region, publisher, offer, sku, top)
        return [MarketplaceImageVersion(name=name) for name in self.versions[:top]]

    async def get_marketplace_image(self, region, publisher, offer, sku, version):
        self._record("get_marketplace_image", region, publisher, offer, sku, version)
        return MarketplaceImageMetadata(operating_system=self.os_type)


@pytest.fixture
def fake_client():
    return FakeComputeClient()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point configuration at a temp file and clear Azure environment."""
    config_path = tmp_path / "imageref" / "config.yaml"
    monkeypatch.setenv("IMAGEREF_CONFIG", str(config_path))
    monkeypatch.delenv("AZURE_SUBSCRIPTION_ID", raising=False)
    return config_path
