import copy

import yaml
from pathlib import Path

DEFAULT_CONFIG = {
    "sheet": {
        "backend": "google",
        "spreadsheet_id": "",
        "worksheet": "Attendance",
        "name_col": 1,
        "date_row": 1,
        "label_row": 2,
        "first_member_row": 3,
        "first_event_col": 2,
        "blackout_color": "#000000",
        "memory": {
            "members": [],
            "events": [],
        },
    },
    "timing": {
        "late_change_hours": 2,
        "past_grace_hours": 24,
    },
    "slack": {
        "enabled": True,
        "notify_channel": "",
        "fallback": "console",
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s [%(levelname)s] [%(name)s:%(lineno)d] - %(message)s",
    },
    "messages": {},
}


def _deep_merge(base: dict, override: dict) -> dict:
    """ベース設定にオーバーライドをマージする"""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: str = "config.yaml") -> dict:
    """YAML設定ファイルをロードし、デフォルト設定とマージして返す"""
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}
        return _deep_merge(DEFAULT_CONFIG, user_config)
    return copy.deepcopy(DEFAULT_CONFIG)
