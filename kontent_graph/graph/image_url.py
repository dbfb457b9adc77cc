"""
Kontent Graph — Asset Image URL Resolver

Adds a computed "url" field to the Asset type. Its arguments become
Kontent Image Transformation API query parameters:

    w, h          width / height
    auto=format   automatic format (with fm=<fallback format>)
    fm            explicit output format
    lossless      true / false
    q             quality
    dpr           device pixel ratio

Parameters are applied in a fixed order: dimensions, format,
compression, quality, dpr. Automatic format wins over an explicit one.
"""

from enum import Enum
from typing import List, Optional


class ImageFormat(str, Enum):
    GIF = "gif"
    JPG = "jpg"
    PJPG = "pjpg"
    PNG = "png"
    PNG8 = "png8"
    WEBP = "webp"


class ImageCompression(str, Enum):
    LOSSLESS = "lossless"
    LOSSY = "lossy"


# Asset media type -> automatic format fallback
AUTOMATIC_FORMATS = {
    "image/gif": ImageFormat.GIF,
    "image/jpeg": ImageFormat.JPG,
    "image/png": ImageFormat.PNG,
}

# Explicit format argument -> output format
EXPLICIT_FORMATS = {
    "gif": ImageFormat.GIF,
    "jpg": ImageFormat.JPG,
    "jpeg": ImageFormat.JPG,
    "pjpg": ImageFormat.PJPG,
    "pjpeg": ImageFormat.PJPG,
    "png": ImageFormat.PNG,
    "png8": ImageFormat.PNG8,
    "webp": ImageFormat.WEBP,
}


class ImageUrlBuilder:

    def __init__(self, url: str):
        self.url = url
        self.params: List[str] = []

    def with_width(self, width: int) -> "ImageUrlBuilder":
        self.params.append(f"w={width}")
        return self

    def with_height(self, height: int) -> "ImageUrlBuilder":
        self.params.append(f"h={height}")
        return self

    def with_automatic_format(self, backup_format: Optional[ImageFormat] = None) -> "ImageUrlBuilder":
        self.params.append("auto=format")
        if backup_format is not None:
            self.with_format(backup_format)
        return self

    def with_format(self, image_format: ImageFormat) -> "ImageUrlBuilder":
        self.params.append(f"fm={image_format.value}")
        return self

    def with_compression(self, compression: ImageCompression) -> "ImageUrlBuilder":
        lossless = "true" if compression is ImageCompression.LOSSLESS else "false"
        self.params.append(f"lossless={lossless}")
        return self

    def with_quality(self, quality: int) -> "ImageUrlBuilder":
        self.params.append(f"q={quality}")
        return self

    def with_dpr(self, dpr: int) -> "ImageUrlBuilder":
        self.params.append(f"dpr={dpr}")
        return self

    def get_url(self) -> str:
        if not self.params:
            return self.url

        separator = "&" if "?" in self.url else "?"
        return f"{self.url}{separator}{'&'.join(self.params)}"


def resolve_asset_url(asset: dict, args: dict) -> str:

    builder = ImageUrlBuilder(asset.get("url"))

    if args.get("width") is not None:
        builder.with_width(args["width"])

    if args.get("height") is not None:
        builder.with_height(args["height"])

    if args.get("automaticFormat"):
        media_type = (asset.get("type") or "").lower()
        backup_format = AUTOMATIC_FORMATS.get(media_type)
        if backup_format is not None:
            builder.with_automatic_format(backup_format)

    elif args.get("format") is not None:
        image_format = EXPLICIT_FORMATS.get(str(args["format"]).lower())
        if image_format is not None:
            builder.with_format(image_format)

    if args.get("lossless") is not None:
        compression = ImageCompression.LOSSLESS if args["lossless"] else ImageCompression.LOSSY
        builder.with_compression(compression)

    if args.get("quality") is not None:
        builder.with_quality(args["quality"])

    if args.get("dpr") is not None:
        builder.with_dpr(args["dpr"])

    return builder.get_url()


def get_asset_schema_resolvers(type_name: str) -> dict:

    def argument(graphql_type: str) -> dict:
        return {"type": graphql_type, "defaultValue": None}

    return {
        type_name: {
            "url": {
                "type": "String",
                "defaultValue": None,
                "args": {
                    "width": argument("Int"),
                    "height": argument("Int"),
                    "automaticFormat": argument("Boolean"),
                    "format": argument("String"),
                    "lossless": argument("Boolean"),
                    "quality": argument("Int"),
                    "dpr": argument("Int"),
                },
                "resolve": resolve_asset_url,
            }
        }
    }
