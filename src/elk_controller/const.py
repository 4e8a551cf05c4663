import os

from elk_controller import __version__

__all__ = [
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_DESCRIPTION_TIMEOUT",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_RECONNECT_MAX_ATTEMPTS",
    "DEFAULT_REQUEST_TIMEOUT",
    "DEFAULT_TLS_MIN_VERSION",
    "ELK_DEBUG",
    "ELK_LOG_FORMAT",
    "ELK_LOG_HUMAN_OUTPUT",
    "ELK_LOG_JSON_FILE",
    "ELK_LOG_NAME",
    "ELK_METRICS_ENABLED",
    "ELK_METRICS_PORT",
    "ELK_VERSION",
    "LOGIN_SUCCESS_PROMPT",
    "PASSWORD_PROMPT",
    "USERNAME_PROMPT",
    "YES_ANSWER",
]

YES_ANSWER = ("true", "1", "yes", "y", "t", 1, "on", "o")
ELK_LOG_NAME: str = "elk_controller"
ELK_VERSION: str = __version__

# Connection defaults. The ELK_HOST / ELK_PORT / ... variables are read by
# ConnectOptions.from_env() at call time, after any --env file is loaded.
DEFAULT_HOST: str = "192.168.1.0"
DEFAULT_PORT: int = 2101
DEFAULT_TLS_MIN_VERSION: str = "TLSv1"
DEFAULT_CONNECT_TIMEOUT: float = 5.0
DEFAULT_REQUEST_TIMEOUT: float = 5.0
DEFAULT_DESCRIPTION_TIMEOUT: float = 15.0
DEFAULT_RECONNECT_MAX_ATTEMPTS: int = 10

# M1XEP login prompts (secure port only)
USERNAME_PROMPT = "Username:"
PASSWORD_PROMPT = "Password:"
LOGIN_SUCCESS_PROMPT = "Elk-M1XEP: Login successful."

# Process settings, read once at import
ELK_DEBUG: bool = os.environ.get("ELK_DEBUG", "0").casefold() in YES_ANSWER

ELK_LOG_FORMAT: str = os.environ.get("ELK_LOG_FORMAT", "human")  # "json", "human", or "both"
_json_file = os.environ.get("ELK_LOG_JSON_FILE")
ELK_LOG_JSON_FILE: str | None = _json_file if _json_file else None
ELK_LOG_HUMAN_OUTPUT: str = os.environ.get("ELK_LOG_HUMAN_OUTPUT", "stdout")  # "stdout", "stderr", or file path

ELK_METRICS_ENABLED: bool = os.environ.get("ELK_METRICS_ENABLED", "0").casefold() in YES_ANSWER
ELK_METRICS_PORT: int = int(os.environ.get("ELK_METRICS_PORT") or 9400)
