import os

from dotenv import load_dotenv  # type: ignore

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))

# repo-root .env first, then the working directory
load_dotenv(dotenv_path=os.path.join(PROJECT_ROOT, ".env"), override=False)
load_dotenv(override=False)

DEFAULTS = {
    "page_title": "Invoice Calculator",
    "gst_rate": "18",
    "gst_mode": "igst",
    "currency_symbol": "₹",
    "log_level": "INFO",
}

_ENV_KEYS = {
    "page_title": "INVOICE_PAGE_TITLE",
    "gst_rate": "INVOICE_DEFAULT_GST_RATE",
    "gst_mode": "INVOICE_DEFAULT_GST_MODE",
    "currency_symbol": "INVOICE_CURRENCY_SYMBOL",
    "log_level": "INVOICE_LOG_LEVEL",
}


def get_settings(environ=None):
    """Defaults overlaid with any INVOICE_* environment variables."""
    environ = os.environ if environ is None else environ
    settings = dict(DEFAULTS)
    for key, env_name in _ENV_KEYS.items():
        value = environ.get(env_name)
        if value:
            settings[key] = value.strip()
    return settings
