"""All magic values live here — no inline literals anywhere else."""

# Azure Computer Vision (Analyze Image, v3.1 feature set)
VISION_API_VERSION = "v3.1"
VISION_ANALYZE_PATH = "/vision/%s/analyze"
VISION_FEATURES = "Description,Faces,Tags"
VISION_FEATURES_PARAM = "visualFeatures"
VISION_KEY_HEADER = "Ocp-Apim-Subscription-Key"
VISION_TIMEOUT_SECONDS: float = 30.0
NO_DESCRIPTION = "No description available"

# Pacing between consecutive analysis calls (milliseconds, inclusive range)
PACING_MIN_MS = 1000
PACING_MAX_MS = 2000

# Output store
DEFAULT_OUTPUT_PATH = "./image_descriptions.txt"
OUTPUT_ENCODING = "utf-8"
RECORD_TEMPLATE = (
    "imageURL: %s\n"
    "suggestedDescription: %s\n"
    "hasHumanFaceOnImage: %s\n"
    "numberOfFacesDetected: %d\n"
    "suggestedKeywords: [%s]\n"
    "\n"
)
KEYWORD_SEPARATOR = ", "

# Azure Blob Storage signed URLs
BLOB_ACCOUNT_URL = "https://%s.blob.core.windows.net"
SAS_TTL_SECONDS = 3600

# Log messages
MSG_BATCH_STARTING = "Starting batch: %d image(s) → %s"
MSG_BATCH_EMPTY = "No images configured — output store emptied, nothing to analyze"
MSG_BATCH_DONE = "Batch finished: %d recorded, %d skipped"
MSG_ANALYZING = "[%d/%d] Analyzing %s"
MSG_RECORDED = "✓ Recorded %s (%d face(s), %d tag(s))"
MSG_ANALYSIS_FAILED = "✗ Analysis failed for %s: %s"
MSG_ISSUANCE_FAILED = "✗ Could not issue signed URL for %s: %s"
MSG_PERSIST_FAILED = "✗ Could not write record for %s: %s"
MSG_NO_ISSUER = "no access-URL issuer configured"
MSG_SINK_INIT_FAILED = "Cannot initialize output store %s: %s"
MSG_SINK_NOT_INITIALIZED = "Output store used before initialize()"
MSG_PACING = "Waiting %.2fs before next request"
MSG_SAS_ISSUED = "Issued read-only signed URL for %s (valid %ds)"
MSG_CONFIG_ERROR = "Configuration error: %s"
