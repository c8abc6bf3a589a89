"""VM image references.

An image can be named three ways:

- a Compute Gallery image definition, by ARM resource identifier
  (``/subscriptions/.../providers/Microsoft.Compute/galleries/<g>/images/<i>``)
- a managed image, by ARM resource identifier
  (``/subscriptions/.../providers/Microsoft.Compute/images/<i>``)
- a marketplace image, by URN (``publisher:offer:sku:version``)

``ImageReference.parse`` classifies a string into one of these, and every
variant answers the same questions: its canonical string, its ARM
``ImageReference`` form, its scale-set VM ceiling, and its OS family.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

from azure.core.exceptions import AzureError
from azure.mgmt.compute.models import ImageReference as ComputeImageReference

from .errors import ErrorCode, ImageResult
from .resource_id import GALLERY_IMAGE_RESOURCE_TYPE, IMAGE_RESOURCE_TYPE, ResourceIdentifier

if TYPE_CHECKING:
    from .client import ComputeMetadataClient

logger = logging.getLogger(__name__)

# Scale set limits for a single placement group, see
# https://learn.microsoft.com/azure/virtual-machine-scale-sets/virtual-machine-scale-sets-placement-groups
CUSTOM_IMAGE_MAX_VM_COUNT = 600
MARKETPLACE_IMAGE_MAX_VM_COUNT = 1000

LATEST_VERSION = "latest"


class OS(str, Enum):
    """Guest operating system family."""

    LINUX = "Linux"
    WINDOWS = "Windows"

    @classmethod
    def parse(cls, value: str) -> "OS":
        """Case-insensitive lookup.

        Raises:
            ValueError: If ``value`` names no known OS family
        """
        for member in cls:
            if isinstance(value, str) and member.value.lower() == value.lower():
                return member
        raise ValueError(f"Unknown operating system: {value!r}")


class ImageReference(ABC):
    """Base class for the three image reference variants."""

    max_vm_count: ClassVar[int]

    @classmethod
    def parse(cls, image: str) -> ImageResult["ImageReference"]:
        """Classify ``image`` as a gallery, managed, or marketplace image.

        A string that is a well-formed ARM identifier is never reinterpreted
        as a marketplace URN.

        Args:
            image: ARM resource identifier or ``publisher:offer:sku:version``

        Returns:
            ImageResult holding the matching variant, or an INVALID_IMAGE error
        """
        try:
            identifier = ResourceIdentifier.parse(image)
        except ValueError:
            logger.debug(f"Not an ARM identifier, trying marketplace URN: {image}")
            return MarketplaceImage.parse_urn(image)

        if identifier.is_type(GALLERY_IMAGE_RESOURCE_TYPE):
            variant = GalleryImage
        elif identifier.is_type(IMAGE_RESOURCE_TYPE):
            variant = ManagedImage
        else:
            return ImageResult.failure(
                ErrorCode.INVALID_IMAGE,
                f"Unknown image resource type: {identifier.resource_type}",
            )

        if not identifier.resource_group:
            return ImageResult.failure(
                ErrorCode.INVALID_IMAGE, f"Image identifier has no resource group: {image}"
            )
        return ImageResult.success(variant(identifier))

    @classmethod
    def must_parse(cls, image: str) -> "ImageReference":
        """Parse input that was validated upstream.

        Raises:
            ValueError: If ``image`` does not parse
        """
        result = cls.parse(image)
        if not result.ok:
            raise ValueError(", ".join(result.error.errors))
        return result.value

    @abstractmethod
    async def resolve_os(
        self, client: "ComputeMetadataClient", region: str
    ) -> ImageResult[OS]:
        """Look up the OS family of the referenced image."""

    @abstractmethod
    def to_arm(self) -> ComputeImageReference:
        """Convert to the Compute API ``ImageReference`` model."""

    @abstractmethod
    def __str__(self) -> str:
        pass

    def to_canonical_string(self) -> str:
        return str(self)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any):
        from .serialization import pydantic_core_schema

        return pydantic_core_schema(cls)

    @classmethod
    def __get_pydantic_json_schema__(cls, schema: Any, handler: Any) -> dict[str, Any]:
        return {"type": "string", "description": f"{cls.__name__} in canonical string form"}


def _wrap_azure_error(image: ImageReference, error: AzureError) -> ImageResult[OS]:
    logger.warning(f"Failed to fetch metadata for image {image}: {error}")
    return ImageResult.failure(ErrorCode.INVALID_IMAGE, str(error))


def _check_identifier(identifier: ResourceIdentifier, resource_type: str):
    if not identifier.is_type(resource_type):
        raise ValueError(
            f"Expected a {resource_type} identifier, got {identifier.resource_type}"
        )
    if not identifier.resource_group:
        raise ValueError(f"Image identifier has no resource group: {identifier}")


def _os_result(os_type: str | None) -> ImageResult[OS]:
    if not os_type:
        return ImageResult.failure(ErrorCode.INVALID_IMAGE, "Specified image had no OS type")
    return ImageResult.success(OS.parse(os_type))


@dataclass(frozen=True)
class GalleryImage(ImageReference):
    """Compute Gallery image definition."""

    identifier: ResourceIdentifier

    max_vm_count: ClassVar[int] = CUSTOM_IMAGE_MAX_VM_COUNT

    def __post_init__(self):
        _check_identifier(self.identifier, GALLERY_IMAGE_RESOURCE_TYPE)

    async def resolve_os(self, client: "ComputeMetadataClient", region: str) -> ImageResult[OS]:
        try:
            metadata = await client.get_gallery_image(self.identifier)
        except AzureError as e:
            return _wrap_azure_error(self, e)
        return _os_result(metadata.os_type)

    def to_arm(self) -> ComputeImageReference:
        return ComputeImageReference(id=str(self.identifier))

    def __str__(self) -> str:
        return str(self.identifier)


@dataclass(frozen=True)
class ManagedImage(ImageReference):
    """Managed (custom) image."""

    identifier: ResourceIdentifier

    max_vm_count: ClassVar[int] = CUSTOM_IMAGE_MAX_VM_COUNT

    def __post_init__(self):
        _check_identifier(self.identifier, IMAGE_RESOURCE_TYPE)

    async def resolve_os(self, client: "ComputeMetadataClient", region: str) -> ImageResult[OS]:
        try:
            metadata = await client.get_image(self.identifier)
        except AzureError as e:
            return _wrap_azure_error(self, e)
        return _os_result(metadata.os_type)

    def to_arm(self) -> ComputeImageReference:
        return ComputeImageReference(id=str(self.identifier))

    def __str__(self) -> str:
        return str(self.identifier)


@dataclass(frozen=True)
class MarketplaceImage(ImageReference):
    """Marketplace image named by URN.

    ``version`` may be ``"latest"``; it is resolved when the OS is looked up,
    never at parse time.
    """

    publisher: str
    offer: str
    sku: str
    version: str

    max_vm_count: ClassVar[int] = MARKETPLACE_IMAGE_MAX_VM_COUNT

    @classmethod
    def parse_urn(cls, image: str) -> ImageResult[ImageReference]:
        parts = image.split(":")
        if len(parts) != 4 or not all(parts):
            return ImageResult.failure(
                ErrorCode.INVALID_IMAGE, f"Expected 4 ':' separated parts in '{image}'"
            )
        publisher, offer, sku, version = parts
        return ImageResult.success(cls(publisher=publisher, offer=offer, sku=sku, version=version))

    async def resolve_os(self, client: "ComputeMetadataClient", region: str) -> ImageResult[OS]:
        try:
            version = self.version
            if version == LATEST_VERSION:
                versions = await client.list_marketplace_image_versions(
                    region, self.publisher, self.offer, self.sku, top=1
                )
                if not versions:
                    return ImageResult.failure(
                        ErrorCode.INVALID_IMAGE,
                        f"No versions of {self.publisher}:{self.offer}:{self.sku} "
                        f"found in {region}",
                    )
                version = versions[0].name
                logger.debug(f"Resolved {self} to version {version} in {region}")

            metadata = await client.get_marketplace_image(
                region, self.publisher, self.offer, self.sku, version
            )
        except AzureError as e:
            return _wrap_azure_error(self, e)
        return _os_result(metadata.operating_system)

    def to_arm(self) -> ComputeImageReference:
        return ComputeImageReference(
            publisher=self.publisher,
            offer=self.offer,
            sku=self.sku,
            version=self.version,
        )

    def __str__(self) -> str:
        return ":".join([self.publisher, self.offer, self.sku, self.version])
