"""
Environment names and well-known locations for path resolution.
"""

# Explicit base directory override
BASE_DIR_ENV = "MCP_BASE_DIR"

# Disables the containment check entirely
ALLOW_ANY_PATH_ENV = "MCP_ALLOW_ANY_PATH"

# Workspace signals, highest priority first
WORKSPACE_ENV_VARS = (
    "VSCODE_WORKSPACE_FOLDER",
    "VSCODE_CWD",
)

# Config file names: working directory candidates first, then home
CWD_CONFIG_FILES = ("mcp-config.json", ".mcp-config.json")
HOME_CONFIG_FILE = ".mcp-config.json"
CONFIG_BASE_DIR_KEY = "baseDir"

# Base directories inside these install locations are unrestricted
UNRESTRICTED_CONTEXT_SIGNATURES = (
    "AppData/Local/Programs/Trae",
)

TRUTHY_VALUES = frozenset({"1", "true", "yes", "on"})
