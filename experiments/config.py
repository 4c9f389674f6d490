"""
experiments/config.py

Loads the YAML configuration, applies scenario overrides, and turns the
`warehouse:` section into keyword arguments for warehouse_sim.sweep.sweep.
Parameter values may be scalars, lists, or range strings such as "1:4"
(1, 2, 3, 4) and "1000:1000:5000" (start:step:stop, stop inclusive).
The default config ships inside the package as experiments/baseline.yaml.
"""

from __future__ import annotations
import copy, math
from importlib import resources
from typing import Any, Dict, List, Optional
import yaml
from warehouse_sim.errors import ConfigError
from warehouse_sim.simulation import PARAM_NAMES

DEFAULT_CONFIG = "baseline.yaml"

def load_cfg(path: Optional[str] = None) -> Dict:
    """Read a YAML config file; with no path, the packaged baseline."""
    if path is None:
        name = f"<packaged {DEFAULT_CONFIG}>"
        text = resources.files("experiments").joinpath(DEFAULT_CONFIG).read_text(encoding="utf-8")
    else:
        name = path
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            raise ConfigError(f"cannot read config {path}: {e.strerror or e}") from e
    try:
        cfg = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"{name}: invalid YAML: {e}") from e
    if not isinstance(cfg, dict):
        raise ConfigError(f"{name}: top level must be a mapping")
    return cfg

def apply_overrides(cfg: Dict, overrides: Dict) -> Dict:
    """Apply scenario overrides (recursive merge) on top of the base config."""
    new = copy.deepcopy(cfg)

    def _merge(dst: Dict, src: Dict):
        for key, val in src.items():
            if isinstance(val, dict) and isinstance(dst.get(key), dict):
                _merge(dst[key], val)
            else:
                dst[key] = copy.deepcopy(val)

    _merge(new, overrides)
    return new

def _number(text: str):
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        return float(text)

def parse_range(text: str) -> List:
    """
    Expand "start:stop" or "start:step:stop" into an inclusive list.
    Integers stay integers; any float part makes every value a float.
    """
    parts = text.split(":")
    if len(parts) not in (2, 3):
        raise ConfigError(f"Bad range {text!r}; expected start:stop or start:step:stop")
    try:
        nums = [_number(p) for p in parts]
    except ValueError:
        raise ConfigError(f"Bad range {text!r}; parts must be numbers") from None
    if len(nums) == 2:
        start, step, stop = nums[0], 1, nums[1]
    else:
        start, step, stop = nums
    if step <= 0:
        raise ConfigError(f"Bad range {text!r}; step must be positive")
    if stop < start:
        return []
    # Tolerance keeps e.g. 0.1:0.1:0.3 from losing its last point
    count = int(math.floor((stop - start) / step + 1e-9)) + 1
    return [start + i * step for i in range(count)]

def parse_value(value: Any) -> Any:
    """A config value: range strings expand to lists, everything else passes through."""
    if isinstance(value, str) and ":" in value:
        return parse_range(value)
    return value

def sweep_params(cfg: Dict) -> Dict[str, Any]:
    """Collect the eight sweep arguments from cfg['warehouse']."""
    section = cfg.get("warehouse")
    if not isinstance(section, dict):
        raise ConfigError("Config needs a 'warehouse' section")
    missing = [k for k in PARAM_NAMES if k not in section]
    if missing:
        raise ConfigError(f"warehouse section is missing: {', '.join(missing)}")
    return {k: parse_value(section[k]) for k in PARAM_NAMES}
