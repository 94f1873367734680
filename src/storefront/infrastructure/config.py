"""Runtime configuration, read from the environment (and a ``.env`` file)."""

import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Storefront settings."""

    # Where the JSON repositories keep their files
    DATA_DIR = os.getenv("STOREFRONT_DATA_DIR", "./data")

    # Logging
    LOG_LEVEL = os.getenv("STOREFRONT_LOG_LEVEL", "WARNING").upper()

    # Payments
    WALLET_ENABLED = os.getenv("STOREFRONT_WALLET_ENABLED", "true").lower() == "true"

    # Amounts in the data files are whole units of this currency
    CURRENCY = os.getenv("STOREFRONT_CURRENCY", "XAF")
