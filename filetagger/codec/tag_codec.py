"""Encoding of tag sets into file names.

A tagged file name has the form::

    <base_name>__<tag1>-<tag2>-...-<tagN><extension>

and an untagged one is simply ``<base_name><extension>``. The name is the
only persisted record of a file's tags, so these functions must stay stable
across releases.

Example:
    >>> encode(["nature", "architecture"])
    '__nature-architecture'
    >>> decode("photo__nature-architecture.jpg")
    DecodedName(base_name='photo', extension='.jpg', tags=['nature', 'architecture'])
"""

from typing import Iterable, List, NamedTuple, Tuple

from filetagger.exceptions import InvalidTagError

START_MARKER = "__"
SPLIT_MARKER = "-"

_PATH_SEPARATORS = ("/", "\\")


class DecodedName(NamedTuple):
    """A file name split into its original base name, extension and tags."""
    base_name: str
    extension: str
    tags: List[str]


def split_extension(file_name: str) -> Tuple[str, str]:
    """Split a file name at its last dot.

    Args:
        file_name: File name without any directory part.

    Returns:
        Tuple of (stem, extension) where extension keeps its leading dot.

    Raises:
        ValueError: If the name contains no dot.
    """
    dot = file_name.rfind(".")
    if dot == -1:
        raise ValueError(f"File name has no extension: {file_name!r}")
    return file_name[:dot], file_name[dot:]


def validate_tag(tag: str) -> None:
    """Check that a tag can be stored in a file name and decoded back.

    Raises:
        InvalidTagError: If the tag is blank, contains a marker, starts with
            the marker's first character, or contains a path separator.
    """
    if not tag or not tag.strip():
        raise InvalidTagError(tag, "tag names must not be empty")
    if START_MARKER in tag:
        raise InvalidTagError(tag, f"tag names must not contain {START_MARKER!r}")
    # A leading "_" would extend the start marker and shift the split point
    if tag.startswith(START_MARKER[0]):
        raise InvalidTagError(tag, f"tag names must not start with {START_MARKER[0]!r}")
    if SPLIT_MARKER in tag:
        raise InvalidTagError(tag, f"tag names must not contain {SPLIT_MARKER!r}")
    for separator in _PATH_SEPARATORS:
        if separator in tag:
            raise InvalidTagError(tag, "tag names must not contain path separators")


def encode(tags: Iterable[str]) -> str:
    """Render tags as a file name suffix, keeping their order.

    Returns an empty string when there are no tags.
    """
    tags = list(tags)
    if not tags:
        return ""
    return START_MARKER + SPLIT_MARKER.join(tags)


def decode(file_name: str) -> DecodedName:
    """Recover the base name, extension and tags from a file name.

    Only the last start marker counts, so a base name may itself contain
    the marker. Empty and repeated tag fragments are dropped.

    Raises:
        ValueError: If the name contains no dot.
    """
    stem, extension = split_extension(file_name)
    start = stem.rfind(START_MARKER)
    if start == -1:
        return DecodedName(stem, extension, [])

    tags: List[str] = []
    for part in stem[start + len(START_MARKER):].split(SPLIT_MARKER):
        if part and part not in tags:
            tags.append(part)
    return DecodedName(stem[:start], extension, tags)


def build_file_name(base_name: str, tags: Iterable[str], extension: str) -> str:
    """Compose the output file name for a base name and tag list."""
    return base_name + encode(tags) + extension
