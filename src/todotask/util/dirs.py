import os
import re
from pathlib import Path

DEFAULT_HOME = os.environ.get("TODOTASK_HOME_DIR", (Path.home() / ".todotask").as_posix())
DEFAULT_ENV_PATH = (Path(DEFAULT_HOME) / "config.env").as_posix()

ID_POLICIES = ("max_plus_one", "counter")
DEFAULT_ID_POLICY = "max_plus_one"
DEFAULT_NOTICE_SECONDS = "2.0"


def ensure_dirs() -> None:
    _path = Path(DEFAULT_HOME)
    _path.mkdir(parents=True, exist_ok=True)


def get_id_policy(env: dict[str, str]) -> str:
    match os.environ.get("TODOTASK_ID_POLICY", env.get("ID_POLICY")):
        case None | "":
            return DEFAULT_ID_POLICY
        case policy if policy in ID_POLICIES:
            return policy
        case policy:
            _msg = f"Invalid ID_POLICY: {policy} (expected one of {', '.join(ID_POLICIES)})"
            raise ValueError(_msg)


def get_notice_seconds(env: dict[str, str]) -> float:
    raw = os.environ.get("TODOTASK_NOTICE_SECONDS", env.get("NOTICE_SECONDS", DEFAULT_NOTICE_SECONDS))
    try:
        seconds = float(raw)
    except ValueError:
        _msg = f"Invalid NOTICE_SECONDS: {raw}"
        raise ValueError(_msg) from None
    if seconds <= 0:
        _msg = f"NOTICE_SECONDS must be positive: {raw}"
        raise ValueError(_msg)
    return seconds


def load_env(path: str = DEFAULT_ENV_PATH) -> dict[str, str]:
    env: dict[str, str] = {}
    _path = Path(path)
    if _path.exists():
        with _path.open(encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                m = re.match(r"([^=]+)=(.*)", line)
                if m:
                    key = m.group(1).strip()
                    val = m.group(2).strip()
                    env[key] = val

    # OS環境変数を上書き優先
    env.update(
        {
            "ID_POLICY": get_id_policy(env),
            "NOTICE_SECONDS": str(get_notice_seconds(env)),
        },
    )
    return env
