"""CLI configuration helpers: data directory, options persistence, command line."""
from __future__ import annotations

import argparse
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Sequence

_DEFAULT_TEXT_MODE = "typewriter"
_DATA_DIR_OVERRIDE_ENV = "WAYFARER_DATA_DIR"


@dataclass(frozen=True, slots=True)
class CommandLineOptions:
    """Flags recognised on the command line. None of them is required."""

    debug: bool = False
    skip_steam: bool = False
    chapter: int | None = None
    node: int | None = None
    validate: bool = False
    data_dir: Path | None = None

    @property
    def has_entry_point(self) -> bool:
        return self.chapter is not None or self.node is not None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wayfarer", description="Play the Wayfarer story in your terminal.")
    parser.add_argument("--debug", action="store_true", help="Disable render delays and show node ids.")
    parser.add_argument(
        "--skipSteam",
        dest="skip_steam",
        action="store_true",
        help="Do not start the platform integration.",
    )
    parser.add_argument("--chapter", type=int, default=None, help="Debug: start from this chapter.")
    parser.add_argument("--node", type=int, default=None, help="Debug: start from this node.")
    parser.add_argument("--validate", action="store_true", help="Validate bundled chapters and exit.")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory for status, config and logs.")
    return parser


def parse_options(argv: Sequence[str] | None = None) -> CommandLineOptions:
    args = build_parser().parse_args(argv)
    return CommandLineOptions(
        debug=args.debug or debug_env_enabled(),
        skip_steam=args.skip_steam,
        chapter=args.chapter,
        node=args.node,
        validate=args.validate,
        data_dir=args.data_dir,
    )


def debug_env_enabled() -> bool:
    """Return True only when WAYFARER_DEBUG is explicitly set to '1'."""
    return os.getenv("WAYFARER_DEBUG") == "1"


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    override = os.environ.get(_DATA_DIR_OVERRIDE_ENV)
    if override:
        return Path(override)
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "Wayfarer"
        return Path.home() / "Wayfarer"
    return Path.home() / ".config" / "wayfarer"


def get_status_path(data_dir: Path | None = None) -> Path:
    return (data_dir or get_user_data_dir()) / "status.json"


def get_default_config_path(data_dir: Path | None = None) -> Path:
    return (data_dir or get_user_data_dir()) / "config.json"


def get_log_path(data_dir: Path | None = None) -> Path:
    return (data_dir or get_user_data_dir()) / "wayfarer.log"


def get_error_log_path(data_dir: Path | None = None) -> Path:
    return (data_dir or get_user_data_dir()) / "error_log.txt"


def _normalize_text_mode(value: object) -> str:
    return "instant" if value == "instant" else _DEFAULT_TEXT_MODE


def load_config(path: Path | None = None) -> Dict[str, str]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {"text_display_mode": _DEFAULT_TEXT_MODE}
    if not isinstance(raw, dict):
        return {"text_display_mode": _DEFAULT_TEXT_MODE}
    return {"text_display_mode": _normalize_text_mode(raw.get("text_display_mode"))}


def save_config(config: Dict[str, str], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"text_display_mode": _normalize_text_mode(config.get("text_display_mode"))}
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
