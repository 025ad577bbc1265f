import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from xlf_translator.logger import get_logger

logger = get_logger(__name__)

# Store column names
ID_COLUMN = "id"
CATEGORY_COLUMN = "category"
MAXWIDTH_COLUMN = "maxwidth"
SIZE_UNIT_COLUMN = "size-unit"
ACTIVE_COLUMN = "active"  # liveness flag, marks whether the id was in the last synced document

SYNC_STRATEGIES = ["rewrite", "targeted"]
STORE_BACKENDS = ["sqlite", "google_sheets"]

# Get base directory (project root)
BASE_DIR = Path(__file__).parent.parent
CONFIG_DIR = BASE_DIR / "config"
CONFIG_FILE = CONFIG_DIR / "config.json"

# Language mappings: display name -> XLF language code
DEFAULT_LANGUAGES = {
    "Spanish": "es",
    "French": "fr",
    "Portuguese": "pt_BR",
    "German": "de",
    "Italian": "it",
    "Turkish": "tr",
    "Dutch": "nl_NL",
    "Greek": "el",
    "Arabic": "ar",
    "Indonesian": "id",
    "Japanese": "ja",
    "Thai": "th",
    "Swedish": "sv",
    "Danish": "da",
    "Finnish": "fi",
    "Norwegian": "no",
    "Korean": "ko",
    "Croatian": "hr",
    "Vietnamese": "vi",
    "Bulgarian": "bg",
    "Polish": "pl",
    "Czech": "cs",
    "Romanian": "ro",
    "Ukrainian": "uk",
    "Hungarian": "hu",
    "Slovenian": "sl",
    "Slovak": "sk",
    "Hebrew": "he",
}

DEFAULT_CONFIG = {
    "source_language": "en_US",
    "source_column": "English",
    "languages": DEFAULT_LANGUAGES,
    "sync_strategy": "rewrite",
    "document": {
        "original": "Salesforce"
    },
    "store": {
        "backend": "sqlite",
        "db_file": str(BASE_DIR / "translations.db"),
        "table": "records"
    },
    "google_sheets": {
        "sheet_id": "",
        "sheet_name": "Workbench_Transl",
        "token": "",
        "timeout": 60
    },
    "log_mode": "off"
}

# Environment variable -> (section, key); section None means top level
ENV_OVERRIDES = {
    "XLF_STORE_BACKEND": ("store", "backend"),
    "XLF_DB_FILE": ("store", "db_file"),
    "GOOGLE_SHEET_ID": ("google_sheets", "sheet_id"),
    "GOOGLE_SHEET_NAME": ("google_sheets", "sheet_name"),
    "GOOGLE_SHEETS_TOKEN": ("google_sheets", "token"),
    "XLF_SYNC_STRATEGY": (None, "sync_strategy"),
    "XLF_LOG_MODE": (None, "log_mode"),
}


def get_config_file(path: Optional[Path] = None) -> Path:
    """Resolve the config file location (argument > XLF_CONFIG_FILE > default)."""
    if path is not None:
        return Path(path)
    env_path = os.environ.get("XLF_CONFIG_FILE")
    if env_path:
        return Path(env_path)
    return CONFIG_FILE


def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Merge overrides into a copy of defaults, one level of nested sections deep."""
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if key == "languages":
            # A configured language map replaces the default one so its order is kept
            merged[key] = dict(value)
        elif isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def _read_config_file(config_file: Path) -> Dict[str, Any]:
    if not config_file.exists():
        return {}
    with open(config_file, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object, got {type(data)}")
    return data


def _apply_env_overrides(config: Dict[str, Any]) -> None:
    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if not value:
            continue
        if section is None:
            config[key] = value
        else:
            config.setdefault(section, {})[key] = value


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load the configuration.

    Values come from DEFAULT_CONFIG, then the JSON config file, then
    environment variables (a .env file in the working directory is loaded first).

    Args:
        path: Optional config file path, defaults to config/config.json

    Returns:
        The merged configuration dictionary
    """
    load_dotenv()
    config_file = get_config_file(path)

    try:
        file_config = _read_config_file(config_file)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse config file {config_file}: {e}")
        logger.warning("Using default configuration")
        file_config = {}

    if file_config:
        logger.debug(f"Configuration loaded from {config_file}")
    else:
        logger.debug("No config file found, using defaults")

    config = _merge(DEFAULT_CONFIG, file_config)
    _apply_env_overrides(config)

    if config["sync_strategy"] not in SYNC_STRATEGIES:
        raise ValueError(
            f"Unknown sync strategy: {config['sync_strategy']}. "
            f"Expected one of: {', '.join(SYNC_STRATEGIES)}"
        )
    return config


def ensure_config_directory(config_file: Path):
    """Ensure the config directory exists."""
    config_file.parent.mkdir(parents=True, exist_ok=True)
    logger.debug(f"Config directory ensured: {config_file.parent}")


def save_config(config: Dict[str, Any], path: Optional[Path] = None):
    """Save the configuration to the JSON config file."""
    config_file = get_config_file(path)
    ensure_config_directory(config_file)
    try:
        with open(config_file, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=4, ensure_ascii=False)
        logger.info(f"Configuration saved to {config_file}")
    except OSError as e:
        logger.error(f"Failed to save config to {config_file}: {e}")
        raise


def create_default_config(path: Optional[Path] = None):
    """Create the default config.json file."""
    save_config(DEFAULT_CONFIG, path)


def base_columns(config: Dict[str, Any]) -> List[str]:
    """Fixed, non-language columns of the store, in header order."""
    return [ID_COLUMN, CATEGORY_COLUMN, MAXWIDTH_COLUMN, SIZE_UNIT_COLUMN, config["source_column"]]


def required_columns(config: Dict[str, Any]) -> List[str]:
    """Columns that must exist before a sync can run."""
    return base_columns(config) + [ACTIVE_COLUMN]


def language_columns(columns: List[str], config: Dict[str, Any]) -> List[str]:
    """Every store column that is neither a base column nor the active flag."""
    fixed = set(required_columns(config))
    return [column for column in columns if column not in fixed]
