"""Constants used throughout deltavcs."""

# Version
VERSION = "0.1.0"

# Directory names
DELTA_DIR = ".delta"
OBJECTS_DIR = "objects"

# File names
HEAD_FILE = "HEAD"
INDEX_FILE = "index"

# Encoding of the HEAD and index files
TEXT_ENCODING = "utf-8"

# Hash algorithm
HASH_ALGORITHM = "sha1"
HASH_LENGTH = 40  # SHA-1 produces 40 hex characters

# Used by `delta commit` when no message is given
DEFAULT_COMMIT_MESSAGE = "No commit message"

# Exit codes
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1
EXIT_SYSTEM_ERROR = 2
EXIT_DATA_ERROR = 3

# Logging
LOG_LEVEL_ENVVAR = "DELTA_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
