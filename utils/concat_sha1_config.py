"""
Loading and typed lookup of the ConcatSHA1 INI configuration.
"""
import configparser
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union
from utils.config.config_normalizer import ConfigNormalizer, NormalizedConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "./config/concat_sha1_config.ini"

OUTPUT_FORMATS = ("hex", "upper", "words")

TRUE_STRINGS = ("true", "yes", "on", "1")
FALSE_STRINGS = ("false", "no", "off", "0")

ConfigType = Union[configparser.ConfigParser, NormalizedConfig]


def load_configuration(path: Optional[str], normalize: bool = True) -> ConfigType:
    """
    Read the INI file at path.

    A missing file is not an error: the result is empty and every setting
    takes its default (environment overrides still apply).

    Args:
        path (str): Path to the configuration file, or None.
        normalize (bool): Return the normalized dict with environment overrides
            applied instead of the raw ConfigParser.

    Returns:
        Normalized dict, or the ConfigParser when normalize is False.
    """
    parser = configparser.ConfigParser()
    if path and not parser.read(path, encoding="utf-8"):
        logger.debug(f"No configuration file at {path}, using defaults")

    if not normalize:
        return parser
    config = ConfigNormalizer().normalize_and_override(parser)
    logger.debug(f"Configuration sections from {path}: {sorted(config)}")
    return config


def write_temp_config(config_dict: dict, tmp_path: str) -> Path:
    """Write config_dict as test_concat_sha1_config.ini under tmp_path and return its path."""
    parser = configparser.ConfigParser()
    parser.read_dict(config_dict)

    config_path = Path(tmp_path) / "test_concat_sha1_config.ini"
    with open(config_path, "w", encoding="utf-8") as f:
        parser.write(f)
    return config_path


def get_config_section(config: ConfigType, section_name: str) -> Dict[str, Any]:
    """
    Return a copy of one section, looked up case-insensitively and through aliases.

    Raises:
        ValueError: If the section does not exist
        TypeError: If config is neither a ConfigParser nor a dict
    """
    if isinstance(config, configparser.ConfigParser):
        config = ConfigNormalizer().normalize_config(config)
    elif not isinstance(config, dict):
        raise TypeError(f"Unsupported configuration type: {type(config).__name__}")

    canonical = ConfigNormalizer().canonical_section(section_name)
    if canonical not in config:
        raise ValueError(f"Configuration section '{section_name}' not found. Available sections: {sorted(config)}")
    return dict(config[canonical])


def _convert(value: Any, value_type: type) -> Any:
    if value_type is bool and isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
        raise ValueError(f"expected one of {TRUE_STRINGS + FALSE_STRINGS}")
    if isinstance(value, str):
        value = value.strip()
    return value_type(value)


def get_config_value(
    config: Optional[ConfigType],
    section: str,
    key: str,
    fallback: Any = None,
    value_type: type = str
) -> Any:
    """
    Get [section] key converted to value_type.

    Missing config, section or key and blank values give the fallback. A value
    that fails conversion gives the fallback with a warning, or raises when
    there is no fallback.

    Args:
        config: Normalized dict or ConfigParser (None means defaults)
        section: Section name or alias
        key: Key name (case-insensitive)
        fallback: Value used when the setting is absent or invalid
        value_type: str, int, float or bool

    Raises:
        ValueError: If the value cannot be converted and fallback is None
    """
    if config is None:
        return fallback
    try:
        values = get_config_section(config, section)
    except ValueError:
        return fallback

    value = values.get(key.strip().lower())
    if value is None or (isinstance(value, str) and not value.strip()):
        return fallback

    try:
        return _convert(value, value_type)
    except (ValueError, TypeError) as e:
        message = f"Failed to convert config value [{section}] {key}={value!r} to {value_type.__name__}: {e}"
        if fallback is None:
            raise ValueError(message) from e
        logger.warning(f"{message}. Using fallback: {fallback}")
        return fallback


def get_output_format(config: Optional[ConfigType]) -> str:
    """
    Return the configured digest output format.

    Unknown formats fall back to 'hex' with a warning.
    """
    output_format = get_config_value(config, "output", "format", fallback="hex").strip().lower()
    if output_format not in OUTPUT_FORMATS:
        logger.warning(f"Unknown output format '{output_format}', using 'hex'. Supported: {', '.join(OUTPUT_FORMATS)}")
        return "hex"
    return output_format
