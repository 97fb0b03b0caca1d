# boxman_api/config.py
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv

# .env varsa ortam değişkenlerini oradan al
load_dotenv()

BASE = Path(__file__).parent
CFG = BASE / "config.yaml"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

EXAMPLE = {
    "name": "pocketbase",
    "base_dir": "~/pb",
    "exec": "pocketbase serve yourdomain.com",
    "user": "pocketbase",
    "group": "pocketbase",
}

DEFAULTS = {
    "systemctl_bin": "systemctl",
    "list_timeout_secs": 10,
    "log_level": "INFO",
}


def _cfg_path() -> Path:
    env = os.getenv("BOXMAN_CONFIG")
    return Path(env) if env else CFG


@lru_cache()
def load_cfg() -> Dict[str, Any]:
    path = _cfg_path()
    cfg = yaml.safe_load(path.read_text()) if path.exists() else {}
    cfg = cfg or {}
    # "key: null" da varsayılana düşer
    for key, value in DEFAULTS.items():
        if cfg.get(key) is None:
            cfg[key] = value
    cfg["example"] = cfg.get("example") or {}
    for key, value in EXAMPLE.items():
        if cfg["example"].get(key) is None:
            cfg["example"][key] = value

    # ortam değişkenleri dosyadaki değerleri ezer
    if os.getenv("BOXMAN_SYSTEMCTL"):
        cfg["systemctl_bin"] = os.environ["BOXMAN_SYSTEMCTL"]
    if os.getenv("BOXMAN_LIST_TIMEOUT"):
        cfg["list_timeout_secs"] = float(os.environ["BOXMAN_LIST_TIMEOUT"])
    if os.getenv("BOXMAN_LOG_LEVEL"):
        cfg["log_level"] = os.environ["BOXMAN_LOG_LEVEL"]
    return cfg


def reload_cfg() -> Dict[str, Any]:
    load_cfg.cache_clear()
    return load_cfg()


def setup_logging() -> None:
    level = str(load_cfg()["log_level"]).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
