"""Configuration management for the ignore list server."""
import os
from dotenv import load_dotenv

# Load .env file if it exists (for local development)
# Note: Environment variables take precedence over .env file
load_dotenv()

APP_ID = "outofsight"

# Directory holding all persisted configuration
CONFIG_DIR = os.getenv("OUTOFSIGHT_CONFIG_DIR", "config")

# Per-player ignore lists, {"<owner uuid>": ["<target uuid>", ...]}
IGNORE_LIST_FILE = os.getenv("IGNORE_LIST_FILE", os.path.join(CONFIG_DIR, f"{APP_ID}.json"))

# Player-facing feedback text
MESSAGES_FILE = os.getenv("MESSAGES_FILE", os.path.join(CONFIG_DIR, APP_ID, "messages.json"))

# Server Configuration
COMMAND_PREFIX = os.getenv("COMMAND_PREFIX", "/")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
