"""Group key derivation from bucket and object key."""

from ..schema import DEFAULT_DELIMITER, DEFAULT_DEPTH


def group_key(
    bucket: str,
    key: str,
    delimiter: str = DEFAULT_DELIMITER,
    depth: int = DEFAULT_DEPTH,
) -> str:
    """
    Get the group key for an object.

    The key is split on ``delimiter`` and the first ``depth`` segments are
    appended to the bucket name. Keys with fewer segments group at their
    full depth.

    Args:
        bucket: Bucket name
        key: Object key
        delimiter: Folder separator
        depth: Number of leading segments to keep (0 = bucket only)

    Returns:
        Group key, e.g. ``"bucket/folder1"`` for key ``"folder1/item.txt"``
        at depth 1
    """
    if depth <= 0:
        return bucket
    segments = key.split(delimiter, depth)[:depth]
    return delimiter.join([bucket, *segments])
