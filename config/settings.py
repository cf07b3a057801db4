import copy
import datetime as dt
import logging
from pathlib import Path

import yaml

CFG_PATH = Path("settings.yaml")

DEFAULTS = {
    "generation": {
        "seed": None,
        "max_attempts": None,
        "progress": True,
    },
    "paths": {
        "output_dir": ".",
        "output_pattern": "prefix_{prefix}.txt",
        "output_excel": None,
        "logs_dir": "logs",
    },
    "existing": {
        "encoding": "utf-8",
        "column": 0,
    },
    "excel": {
        "font_name": "Meiryo",
    },
}


def _merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, val in override.items():
        if isinstance(val, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], val)
        else:
            merged[key] = val
    return merged


def load_settings(path=CFG_PATH) -> dict:
    """settings.yaml を既定値に上書きマージして返す（ファイルが無ければ既定値）"""
    path = Path(path)
    if not path.exists():
        return copy.deepcopy(DEFAULTS)
    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"{path}: {e}") from e
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ValueError(f"{path}: settings must be a mapping")
    return _merge(DEFAULTS, loaded)


def setup_logger(level="INFO", log_dir=None):
    logger = logging.getLogger("ExamCodeManager")
    for h in logger.handlers:
        h.close()
    logger.handlers.clear()  # 二重登録防止
    logger.setLevel(level.upper())
    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / f"run_{dt.datetime.now():%Y%m%d_%H%M%S}.log"
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(fmt)
    logger.addHandler(stream_handler)
    return logger
