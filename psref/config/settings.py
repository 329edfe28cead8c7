# psref/config/settings.py

"""Central configuration for the psref client."""

from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the psref client."""

    # --- Service ---
    # psrefapi.lenovo.com:8081 used to serve the API; that name now
    # resolves to a different host.
    DEFAULT_BASE_URL: str = "http://104.232.254.26:8081"
    API_VERSION: str = "2"              # Sent as api_v on every request

    # --- Requests ---
    REQUEST_TIMEOUT: float = 30.0       # Seconds before a request times out
    DEFAULT_RETRIES: int = 3            # Attempts per request (-1 = forever)
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Rate limiting ---
    RATE_INTERVAL: float = 1.0 / 3      # Seconds per token
    RATE_BURST: int = 10                # Bucket capacity

    # --- Endpoints ---
    PRODUCTS_PATH: str = "/"
    WITHDRAWN_PRODUCTS_PATH: str = "/psref/mobile/withdrawproducts"
    UPDATES_PATH: str = "/psref/mobile/new"
    PRODUCT_PATH: str = "/psref/mobile/product/{pid}"
    MODEL_PATH: str = "/psref/mobile/Model/{pid}/{code}"
    BOOKS_PATH: str = "/psref/mobile/book"
    SEARCH_PATH: str = "/psref/mobile/searchv3"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"
