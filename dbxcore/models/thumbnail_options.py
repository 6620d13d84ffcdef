"""
dbxcore - Thumbnail Option Models

Enumerations of the thumbnail formats and sizes accepted by the API.
"""

from enum import Enum


class ThumbnailFormat(Enum):
    """Image format of a thumbnail"""
    JPEG = "jpeg"
    PNG = "png"


class ThumbnailSize(Enum):
    """
    Bounding box of a thumbnail.

    xs: 32x32, s: 64x64, m: 128x128, l: 640x480, xl: 1024x768
    """
    XS = "xs"
    S = "s"
    M = "m"
    L = "l"
    XL = "xl"
