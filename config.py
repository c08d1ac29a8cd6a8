import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./rewards.db")
    DB_ECHO = bool(data.get("DB_ECHO", False))
    SQLITE_BUSY_TIMEOUT = data.get("SQLITE_BUSY_TIMEOUT", 30)  # Seconds a writer waits for the database lock
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Redemption engine
    REDEMPTION_MAX_ATTEMPTS = data.get("REDEMPTION_MAX_ATTEMPTS", 3)  # Attempts on write conflict

    # Leaderboard
    LEADERBOARD_DEFAULT_SIZE = data.get("LEADERBOARD_DEFAULT_SIZE", 10)
    LEADERBOARD_MAX_SIZE = data.get("LEADERBOARD_MAX_SIZE", 100)

    # Ledger Reconciliation
    RECONCILIATION_ENABLED = bool(data.get("RECONCILIATION_ENABLED", True))
    RECONCILIATION_INTERVAL_SECONDS = data.get("RECONCILIATION_INTERVAL_SECONDS", 86400)  # Daily
