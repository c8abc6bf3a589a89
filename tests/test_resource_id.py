"""Tests for ARM resource identifier parsing."""

import pytest

from conftest import GALLERY_IMAGE_ID, MANAGED_IMAGE_ID, SUBSCRIPTION
from imageref.resource_id import (
    GALLERY_IMAGE_RESOURCE_TYPE,
    IMAGE_RESOURCE_TYPE,
    ResourceIdentifier,
)


class TestResourceIdentifier:
    """Test identifier parsing and resource type derivation."""

    def test_gallery_image(self):
        rid = ResourceIdentifier.parse(GALLERY_IMAGE_ID)
        assert rid.resource_type == GALLERY_IMAGE_RESOURCE_TYPE
        assert rid.subscription_id == SUBSCRIPTION
        assert rid.resource_group == "images-rg"
        assert rid.names == ["sharedGallery", "ubuntu-fuzz"]
        assert rid.name == "ubuntu-fuzz"

    def test_managed_image(self):
        rid = ResourceIdentifier.parse(MANAGED_IMAGE_ID)
        assert rid.resource_type == IMAGE_RESOURCE_TYPE
        assert rid.names == ["win-fuzz"]

    def test_resource_group(self):
        rid = ResourceIdentifier.parse(f"/subscriptions/{SUBSCRIPTION}/resourceGroups/rg")
        assert rid.resource_type == "Microsoft.Resources/resourceGroups"
        assert rid.name == "rg"

    def test_str_preserves_input(self):
        assert str(ResourceIdentifier(GALLERY_IMAGE_ID)) == GALLERY_IMAGE_ID

    def test_is_type_case_insensitive(self):
        rid = ResourceIdentifier(MANAGED_IMAGE_ID)
        assert rid.is_type("microsoft.compute/images")
        assert not rid.is_type(GALLERY_IMAGE_RESOURCE_TYPE)

    @pytest.mark.parametrize(
        "raw",
        [
            "Canonical:UbuntuServer:18.04-LTS:latest",
            "",
            "subscriptions/abc",
            f"/subscriptions/{SUBSCRIPTION}/somethingElse/x",
        ],
    )
    def test_invalid(self, raw):
        with pytest.raises(ValueError, match="Invalid Azure resource identifier"):
            ResourceIdentifier.parse(raw)
