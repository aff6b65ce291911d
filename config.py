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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./payouts.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    CREATE_TABLES_ON_STARTUP = bool(data.get("CREATE_TABLES_ON_STARTUP", False))

    # Paystack
    PAYSTACK_SECRET_KEY = data.get("PAYSTACK_SECRET_KEY", "")
    PAYSTACK_BASE_URL = data.get("PAYSTACK_BASE_URL", "https://api.paystack.co")
    PAYSTACK_TIMEOUT_SECONDS = data.get("PAYSTACK_TIMEOUT_SECONDS", 15.0)
    PAYSTACK_PLAN_CODE = data.get("PAYSTACK_PLAN_CODE", "")
    PAYSTACK_TRANSFER_CURRENCY = data.get("PAYSTACK_TRANSFER_CURRENCY", "NGN")

    # Subscriptions
    SUBSCRIPTION_PRICE = data.get("SUBSCRIPTION_PRICE", 500000)  # Minor units (kobo)
    CLIENT_URL = data.get("CLIENT_URL", "http://localhost:3000")

    # Notifications
    NOTIFICATION_WEBHOOK_URL = data.get("NOTIFICATION_WEBHOOK_URL", None)
    OPERATOR_ALERT_WEBHOOK_URL = data.get("OPERATOR_ALERT_WEBHOOK_URL", None)

    # Ledger Reconciliation
    RECONCILIATION_ENABLED = bool(data.get("RECONCILIATION_ENABLED", True))
    RECONCILIATION_INTERVAL_SECONDS = data.get("RECONCILIATION_INTERVAL_SECONDS", 86400)  # Daily
