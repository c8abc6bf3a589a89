"""imageref - Azure VM image reference parsing and resolution."""

__version__ = "0.1.0"

from .errors import (
    ErrorCode,
    ImageError,
    ImageRefError,
    ImageReferenceDecodeError,
    ImageResult,
    InvalidImageError,
)
from .reference import (
    CUSTOM_IMAGE_MAX_VM_COUNT,
    MARKETPLACE_IMAGE_MAX_VM_COUNT,
    OS,
    GalleryImage,
    ImageReference,
    ManagedImage,
    MarketplaceImage,
)
from .resource_id import ResourceIdentifier
from .serialization import decode_image_reference, encode_image_reference

__all__ = [
    "CUSTOM_IMAGE_MAX_VM_COUNT",
    "MARKETPLACE_IMAGE_MAX_VM_COUNT",
    "OS",
    "ErrorCode",
    "GalleryImage",
    "ImageError",
    "ImageRefError",
    "ImageReference",
    "ImageReferenceDecodeError",
    "ImageResult",
    "InvalidImageError",
    "ManagedImage",
    "MarketplaceImage",
    "ResourceIdentifier",
    "decode_image_reference",
    "encode_image_reference",
    "__version__",
]
