"""File name codec for filetagger.

Pure functions that translate between a tag list and the file name suffix
that stores it. Nothing in this package touches the file system.
"""

from .tag_codec import (
    SPLIT_MARKER,
    START_MARKER,
    DecodedName,
    build_file_name,
    decode,
    encode,
    split_extension,
    validate_tag,
)

__all__ = [
    "START_MARKER",
    "SPLIT_MARKER",
    "DecodedName",
    "build_file_name",
    "decode",
    "encode",
    "split_extension",
    "validate_tag",
]
