"""Constants used throughout RootVCS."""

# Version
VERSION = "0.1.0"

# Directory names
ROOT_DIR = ".root"
OBJECTS_DIR = "objects"

# File names
HEAD_FILE = "HEAD"
INDEX_FILE = "index"
CONFIG_FILE = "config"

# Hash algorithm
HASH_ALGORITHM = "sha256"
HASH_LENGTH = 64  # SHA-256 produces 64 hex characters
SHARD_LENGTH = 2  # objects/<hash[:2]>/<hash[2:]>

# On-disk format versions
INDEX_VERSION = 1

# Remote push
PUSH_ENDPOINT = "push"
DEFAULT_PUSH_TIMEOUT = 30.0  # seconds

# Exit codes
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1
EXIT_SYSTEM_ERROR = 2
EXIT_DATA_ERROR = 3
EXIT_INTERRUPTED = 130
