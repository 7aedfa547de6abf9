"""
Global constants for the ghkit CLI.
"""

# Project identity
APP_NAME = "ghkit"
APP_REPO_PATH = "ghkit/ghkit"
APP_URL = f"https://github.com/{APP_REPO_PATH}"

# Access token rules
TOKEN_LENGTH = 40
TOKEN_PATTERN = r"^ghp_[a-zA-Z0-9]+$"
CREDENTIALS_FILE_TOKEN_PATTERN = r"(ghp_[a-zA-Z0-9]+):?"
TOKEN_ENV_VAR = "GITHUB_TOKEN"

# Local credential sources (read only)
GITCONFIG_PATH = "~/.gitconfig"
GIT_CREDENTIALS_PATH = "~/.git-credentials"
GITCONFIG_SECTION = "user"
# Key name as historically written by the tooling that populates it
GITCONFIG_TOKEN_KEY = "passoword"

# Name rules
USERNAME_PATTERN = r"^[a-zA-Z0-9-_]+$"
REPO_NAME_PATTERN = r"^[a-zA-Z0-9-_\.]+$"
MAX_DESCRIPTION_LENGTH = 255

# SSH key management
SSH_DIR = "~/.ssh"
SSH_KEY_NAME = "ghkit_ed25519.pem"
SSH_KEY_TITLE = "ghkit"
SSH_KEY_IN_USE_PATTERN = r'"message"\s*:\s*"key is already in use"'

# Hosting API
DEFAULT_API_BASE_URL = "https://api.github.com"
DEFAULT_WEB_BASE_URL = "https://github.com"
API_TIMEOUT = 30.0
DEFAULT_HEADERS = {
    "Accept": "application/vnd.github+json",
    "X-GitHub-Api-Version": "2022-11-28",
    "User-Agent": APP_NAME,
}

# Git defaults
DEFAULT_BRANCH = "main"
DEFAULT_REMOTE_NAME = "origin"
EXTERNAL_REMOTE_NAME = "external"
INITIAL_COMMIT_MESSAGE = "Initial commit [ghkit]"
MIRROR_TAGS_REFSPEC = "refs/tags/*:refs/tags/*"

# Fetch-until-commit pacing
FETCH_RETRY_DELAY = 0.5  # seconds, measured from the start of each attempt
FETCH_RETRY_LIMIT = 10

# Logging constants
LOG_APP_NAME = "ghkit"
LOG_FILE_NAME = "ghkit"
LOG_RETENTION_DAYS = 7
LOG_LINES_TO_SHOW = 20

# Sensitive data keys for sanitization
SENSITIVE_KEYS = (
    "password", "passoword", "token", "access_token", "key", "secret",
    "private_key", "authorization", "bearer", "cookie", "extraheader",
)
