# astrocal/utils/config.py
import json
import logging
import os

import yaml

from astrocal.core.daycount import CalendarReform
from astrocal.core.rules import RuleTables

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/defaults.yaml"


class AttrDict(dict):
    """Dict that also supports attribute access: cfg.rules and cfg['rules'] both work."""
    def __getattr__(self, item):
        try:
            return self[item]
        except KeyError as e:
            raise AttributeError(item) from e
    def __setattr__(self, key, value):
        self[key] = value

def _to_attr(obj):
    if isinstance(obj, dict):
        return AttrDict({k: _to_attr(v) for k, v in obj.items()})
    if isinstance(obj, list):
        return [_to_attr(x) for x in obj]
    return obj

def _load_json_if(path):
    if not path:
        return {}
    if not os.path.exists(path):
        log.warning("rules override file not found: %s", path)
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f) or {}

def _parse_reform_env(value):
    # 'YYYY-MM-DD/DD' → mapping accepted by CalendarReform.from_config
    date_part, first_new = value.strip().split("/", 1)
    sign = -1 if date_part.startswith("-") else 1
    y, m, d = date_part.lstrip("+-").split("-")
    return {
        "year": sign * int(y),
        "month": int(m),
        "last_old_day": int(d),
        "first_new_day": int(first_new),
    }

def load_config(path: str = None):
    """
    Load YAML config from `path` (or $ASTROCAL_CONFIG, or config/defaults.yaml).
    Optional overrides:
      - ASTROCAL_REFORM      'YYYY-MM-DD/DD' replaces the calendar reform section
      - ASTROCAL_RULES_JSON  JSON file whose keys replace entries of the rules section
    A missing file yields an empty config (built-in defaults apply).
    Returns an AttrDict for convenient access.
    """
    path = path or os.getenv("ASTROCAL_CONFIG", DEFAULT_CONFIG_PATH)
    data = {}
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        log.info("config loaded from %s", path)
    else:
        log.info("config file %s not found; using built-in defaults", path)

    reform_env = os.getenv("ASTROCAL_REFORM")
    if reform_env:
        data["reform"] = _parse_reform_env(reform_env)
        log.info("calendar reform overridden from env: %s", reform_env)

    rules_path = os.getenv("ASTROCAL_RULES_JSON")
    if rules_path:
        rules = dict(data.get("rules") or {})
        rules.update(_load_json_if(rules_path))
        data["rules"] = rules
        log.info("rule tables merged from %s", rules_path)

    return _to_attr(data)

def build_engine_config(cfg):
    """Turn a loaded config into the immutable (reform, rule tables) pair."""
    cfg = cfg or {}
    reform = CalendarReform.from_config(cfg.get("reform"))
    rules = RuleTables.from_config(cfg.get("rules"))
    return reform, rules
