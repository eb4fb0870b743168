import os

from fulbito_model import Config as TeamgenConfig

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _load_env() -> None:
    candidates = [
        os.path.join(BASE_DIR, ".env"),
        os.path.join(BASE_DIR, "backend", ".env"),
    ]
    for path in candidates:
        if not os.path.exists(path):
            continue
        with open(path, "r", encoding="utf-8") as handle:
            for raw in handle:
                line = raw.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"').strip("'")
                if key and key not in os.environ:
                    os.environ[key] = value


def _team_sizes(raw: str) -> tuple:
    return tuple(int(part) for part in raw.split(",") if part.strip())


_load_env()


class Config:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///" + os.path.join(BASE_DIR, "fulbito.db"))
    SQLALCHEMY_ECHO = os.getenv("SQLALCHEMY_ECHO", "0") == "1"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    AUTO_CREATE_SCHEMA = os.getenv("AUTO_CREATE_SCHEMA", "1") == "1"

    TEAMGEN_TEAM_SIZES = _team_sizes(os.getenv("TEAMGEN_TEAM_SIZES", "5,6,8,11"))
    TEAMGEN_TOP_N = int(os.getenv("TEAMGEN_TOP_N", "3"))
    TEAMGEN_MAX_COMBINATIONS = int(os.getenv("TEAMGEN_MAX_COMBINATIONS", "50000"))
    TEAMGEN_WORKERS = int(os.getenv("TEAMGEN_WORKERS", "2"))
    TEAMGEN_MAX_JOBS = int(os.getenv("TEAMGEN_MAX_JOBS", "100"))

    DUO_MIN_GAMES = int(os.getenv("DUO_MIN_GAMES", "5"))

    @classmethod
    def teamgen_config(cls) -> TeamgenConfig:
        return TeamgenConfig(
            supported_team_sizes=cls.TEAMGEN_TEAM_SIZES,
            default_top_n=cls.TEAMGEN_TOP_N,
            max_combinations=cls.TEAMGEN_MAX_COMBINATIONS,
        )
