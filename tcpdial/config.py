import os
from dotenv import load_dotenv

load_dotenv()


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    return float(raw)


class Settings:
    TCPDIAL_CONNECT_TIMEOUT_SECONDS: float | None = _optional_float(
        "TCPDIAL_CONNECT_TIMEOUT_SECONDS"
    )
    TCPDIAL_CHECK_TIMEOUT_SECONDS: float = float(
        os.getenv("TCPDIAL_CHECK_TIMEOUT_SECONDS", "3")
    )


settings = Settings()
