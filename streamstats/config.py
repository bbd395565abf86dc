import logging
import os
from pathlib import Path
from typing import Mapping, Optional

import yaml

from streamstats.bench.types import StatsConfig
from streamstats.export.result_sink import OUTPUT_FORMATS

DEFAULT_OUTPUT_FORMAT = "text"
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _load_yaml(path: str) -> dict:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {p}")
    return data


def _check_format(fmt: str) -> str:
    fmt = str(fmt).strip().lower()
    if fmt not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown output format: {fmt!r} (expected one of {OUTPUT_FORMATS})")
    return fmt


def _check_level(level: str) -> str:
    name = str(level).strip().upper()
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(f"Unknown log level: {level!r}")
    return name


def load_config(
    config_path: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    input_path: Optional[str] = None,
    output_format: Optional[str] = None,
    log_level: Optional[str] = None,
) -> StatsConfig:
    """
    Resolve the effective configuration. Later layers win:

      1) defaults
      2) YAML file (keys: input, log_level, export.format)
      3) environment: STATS_INPUT, STATS_OUTPUT_FORMAT, STATS_LOG_LEVEL
      4) explicit arguments (command line flags)
    """
    env = os.environ if env is None else env

    file_cfg = _load_yaml(config_path) if config_path else {}
    export_cfg = file_cfg.get("export") or {}

    resolved_input = file_cfg.get("input")
    resolved_format = export_cfg.get("format") or DEFAULT_OUTPUT_FORMAT
    resolved_level = file_cfg.get("log_level") or DEFAULT_LOG_LEVEL

    resolved_input = env.get("STATS_INPUT") or resolved_input
    resolved_format = env.get("STATS_OUTPUT_FORMAT") or resolved_format
    resolved_level = env.get("STATS_LOG_LEVEL") or resolved_level

    resolved_input = input_path or resolved_input
    resolved_format = output_format or resolved_format
    resolved_level = log_level or resolved_level

    if resolved_input == "-":
        resolved_input = None

    return StatsConfig(
        input_path=str(resolved_input) if resolved_input else None,
        output_format=_check_format(resolved_format),
        log_level=_check_level(resolved_level),
    )


def configure_logging(level: str, stream) -> logging.Logger:
    logger = logging.getLogger("streamstats")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
