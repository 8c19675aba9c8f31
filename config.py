import importlib
import os
from pathlib import Path

_ENV_LOADED = False


def _load_env() -> None:
    global _ENV_LOADED
    if _ENV_LOADED:
        return
    try:
        dotenv = importlib.import_module("dotenv")
    except ImportError as exc:  # pragma: no cover
        raise SystemExit("python-dotenv is required (pip install -e .)") from exc
    env_path = Path(__file__).resolve().parent / ".env"
    dotenv.load_dotenv(dotenv_path=env_path)
    _ENV_LOADED = True


def get_env(
    name: str, default: str | None = None, required: bool = False
) -> str | None:
    _load_env()
    value = os.environ.get(name, default)
    if required and (value is None or value == ""):
        raise SystemExit(f"{name} env var is required")
    return value


def get_env_int(name: str, default: int) -> int:
    value = get_env(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise SystemExit(f"{name} must be an integer, got {value!r}") from exc


def get_env_bool(name: str, default: bool = False) -> bool:
    value = get_env(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


ROUTING_CONFIG = {
    "max_hops": get_env_int("CPMM_ROUTER_MAX_HOPS", 3),
    "default_slippage_bps": get_env_int("CPMM_ROUTER_DEFAULT_SLIPPAGE_BPS", 10),
    "strict": get_env_bool("CPMM_ROUTER_STRICT", False),
}
