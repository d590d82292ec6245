from dotenv import load_dotenv
from pydantic import BaseModel

import os

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() == "true"


class Settings(BaseModel):
    # Per-round deadline in seconds, 0 disables the server-side round timer
    round_timeout_sec: float = 15.0
    result_delay_sec: float = 2.0
    timeout_restart_delay_sec: float = 0.0
    losing_score: int = -10
    target_factor: float = 0.8
    game_code_length: int = 6
    allow_client_timeout: bool = False

    cors_origins: list[str] = ["*"]
    static_dir: str | None = None
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            round_timeout_sec=float(os.environ.get("ROUND_TIMEOUT_SEC", "15")),
            result_delay_sec=float(os.environ.get("RESULT_DELAY_SEC", "2")),
            timeout_restart_delay_sec=float(
                os.environ.get("TIMEOUT_RESTART_DELAY_SEC", "0")
            ),
            losing_score=int(os.environ.get("LOSING_SCORE", "-10")),
            target_factor=float(os.environ.get("TARGET_FACTOR", "0.8")),
            game_code_length=int(os.environ.get("GAME_CODE_LENGTH", "6")),
            allow_client_timeout=_env_bool("ALLOW_CLIENT_TIMEOUT"),
            cors_origins=[
                origin.strip()
                for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
                if origin.strip()
            ],
            static_dir=os.getenv("STATIC_DIR"),
            host=os.environ.get("HOST", "127.0.0.1"),
            port=int(os.environ.get("PORT", "8080")),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
