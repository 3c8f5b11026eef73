import os

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Development-only key. Override with TOKEN_SIGNING_KEY in any real deployment.
DEV_SIGNING_KEY = "ZGV2LW9ubHktc2lnbmluZy1rZXktY2hhbmdlLW1lLWJlZm9yZS1kZXBsb3lpbmc="


class Config:
    # token.signing.key: base64 encoded HS256 secret
    TOKEN_SIGNING_KEY = os.environ.get("TOKEN_SIGNING_KEY", DEV_SIGNING_KEY)
    TOKEN_EXPIRE_MINUTES = int(os.environ.get("TOKEN_EXPIRE_MINUTES", 2400))  # ~1.67 days

    DATABASE_URL = os.environ.get(
        "DATABASE_URL", "sqlite:///" + os.path.join(BASE_DIR, "..", "tasks.db")
    )
    BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", 12))

    DEFAULT_PAGE_SIZE = int(os.environ.get("DEFAULT_PAGE_SIZE", 20))
    MAX_PAGE_SIZE = int(os.environ.get("MAX_PAGE_SIZE", 100))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
