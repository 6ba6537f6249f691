import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./marketplace.db")
    CREATE_TABLES_ON_STARTUP = bool(data.get("CREATE_TABLES_ON_STARTUP", True))
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Payment gateway (Asaas v3)
    GATEWAY_BASE_URL = data.get("GATEWAY_BASE_URL", "https://api.asaas.com/v3")
    GATEWAY_API_KEY = data.get("GATEWAY_API_KEY", "")
    GATEWAY_TIMEOUT_SECONDS = data.get("GATEWAY_TIMEOUT_SECONDS", 10.0)
    GATEWAY_WEBHOOK_TOKEN = data.get("GATEWAY_WEBHOOK_TOKEN", None)  # asaas-access-token header

    # Settlement rules
    MIN_DEPOSIT_AMOUNT = data.get("MIN_DEPOSIT_AMOUNT", "5.00")
    MIN_WITHDRAWAL_AMOUNT = data.get("MIN_WITHDRAWAL_AMOUNT", "10.00")
    WITHDRAWAL_FEE_RATE = data.get("WITHDRAWAL_FEE_RATE", "0.05")
    PLATFORM_ACCOUNT_ID = data.get("PLATFORM_ACCOUNT_ID", "00000000-0000-0000-0000-000000000001")
    PLATFORM_ACCOUNT_EMAIL = data.get("PLATFORM_ACCOUNT_EMAIL", "platform@localhost")

    # Ledger Reconciliation
    RECONCILIATION_ENABLED = bool(data.get("RECONCILIATION_ENABLED", True))
    RECONCILIATION_INTERVAL_SECONDS = data.get("RECONCILIATION_INTERVAL_SECONDS", 86400)  # Daily
