"""Inventory record field names and storage tier constants.

S3 Inventory CSV exports carry no header row; the column order comes from
the ``fileSchema`` entry of the delivery's ``manifest.json``.
"""

# Inventory record fields
FIELD_BUCKET = "Bucket"
FIELD_KEY = "Key"
FIELD_VERSION_ID = "VersionId"
FIELD_IS_LATEST = "IsLatest"
FIELD_IS_DELETE_MARKER = "IsDeleteMarker"
FIELD_SIZE = "Size"
FIELD_LAST_MODIFIED_DATE = "LastModifiedDate"
FIELD_ETAG = "ETag"
FIELD_STORAGE_CLASS = "StorageClass"
FIELD_IS_MULTIPART_UPLOADED = "IsMultipartUploaded"
FIELD_REPLICATION_STATUS = "ReplicationStatus"

DEFAULT_INVENTORY_COLUMNS: tuple[str, ...] = (
    FIELD_BUCKET,
    FIELD_KEY,
    FIELD_VERSION_ID,
    FIELD_IS_LATEST,
    FIELD_IS_DELETE_MARKER,
    FIELD_SIZE,
    FIELD_LAST_MODIFIED_DATE,
    FIELD_ETAG,
    FIELD_STORAGE_CLASS,
    FIELD_IS_MULTIPART_UPLOADED,
    FIELD_REPLICATION_STATUS,
)
"""Column order used when no manifest schema is available."""

REQUIRED_INVENTORY_COLUMNS: frozenset[str] = frozenset(
    {FIELD_BUCKET, FIELD_KEY, FIELD_SIZE, FIELD_STORAGE_CLASS}
)
"""Columns an inventory configuration must include to be aggregated."""

# Storage tiers
STORAGE_CLASS_STANDARD = "STANDARD"
STORAGE_CLASS_STANDARD_IA = "STANDARD_IA"
STORAGE_CLASS_REDUCED_REDUNDANCY = "REDUCED_REDUNDANCY"
STORAGE_CLASS_GLACIER = "GLACIER"

DEFAULT_STORAGE_CLASSES: tuple[str, ...] = (
    STORAGE_CLASS_STANDARD,
    STORAGE_CLASS_STANDARD_IA,
    STORAGE_CLASS_REDUCED_REDUNDANCY,
    STORAGE_CLASS_GLACIER,
)
"""Tiers pre-seeded at zero in every group so snapshots keep a stable shape."""

# Output shape
SNAPSHOT_PATH = "path"
SNAPSHOT_STORAGE_CLASS = "storageClass"
TALLY_COUNT = "count"
TALLY_SIZE = "size"

# Defaults
DEFAULT_DELIMITER = "/"
DEFAULT_DEPTH = 0
DEFAULT_OUTPUT_FACTOR = 100

BOOLEAN_TRUE = "TRUE"
