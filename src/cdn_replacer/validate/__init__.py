"""Option validation helpers."""

from cdn_replacer.validate.rules import (
    CDN_PREFIX_PATTERN,
    require_static_root,
    validate_cdn_prefix,
    validate_encoding,
)

__all__ = [
    "CDN_PREFIX_PATTERN",
    "validate_cdn_prefix",
    "validate_encoding",
    "require_static_root",
]
