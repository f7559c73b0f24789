"""Pipeline configuration defaults.

Configuration is a plain dict; callers pass only the keys they want to
override.
"""

from typing import Any, Dict, Optional

DEFAULT_CONFIG: Dict[str, Any] = {
    # Text decoding for delimited and SQL sources (utf-8-sig drops a BOM)
    "encoding": "utf-8-sig",
    "delimiter": ",",
    # Percent of missing cells above which a column is reported
    "high_missing_threshold": 20.0,
    "top_values_limit": 5,
    # Run validator and statistics on two threads
    "profile_concurrently": False,
}


def resolve_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Merge caller overrides over DEFAULT_CONFIG."""
    cfg = dict(DEFAULT_CONFIG)
    if not config:
        return cfg
    unknown = sorted(set(config) - set(DEFAULT_CONFIG))
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
    cfg.update(config)
    if len(str(cfg["delimiter"])) != 1:
        raise ValueError("delimiter must be a single character")
    if int(cfg["top_values_limit"]) < 0:
        raise ValueError("top_values_limit must be >= 0")
    return cfg
