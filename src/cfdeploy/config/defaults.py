"""Default settings for the cfdeploy upload stage."""

# Cloud Functions API origin (both generations are served from the same host)
FUNCTIONS_ORIGIN = "https://cloudfunctions.googleapis.com"
FUNCTIONS_V1_API_VERSION = "v1"
FUNCTIONS_V2_API_VERSION = "v2"

# Gen-1 uploads declare an accepted size range on the transfer itself
GCFV1_MAX_SOURCE_BYTES = 100 * 1024 * 1024  # 100 MiB
CONTENT_LENGTH_RANGE_HEADER = "x-goog-content-length-range"

SOURCE_CONTENT_TYPE = "application/zip"

DEFAULT_HTTP_SETTINGS: dict[str, int | float] = {
    "http_timeout": 60.0,  # seconds
    "upload_chunk_size": 1024 * 1024,  # bytes
}


def gcfv1_upload_headers() -> dict[str, str]:
    """Return the extra headers sent with every gen-1 source upload."""
    return {CONTENT_LENGTH_RANGE_HEADER: f"0,{GCFV1_MAX_SOURCE_BYTES}"}
