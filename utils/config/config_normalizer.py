"""
Case-insensitive view of the ConcatSHA1 configuration.

Section names such as [Hashing], [HASHING] or [sha1] all resolve to the
canonical [hashing] section; CONCAT_SHA1_* environment variables are applied
on top of the file values.
"""

import os
import logging
from typing import Dict, Any, List, Tuple, Union
from configparser import ConfigParser

logger = logging.getLogger(__name__)

NormalizedConfig = Dict[str, Dict[str, Any]]


class ConfigNormalizer:
    """
    Folds configuration sections and keys to lowercase canonical names.

    Attributes:
        applied_overrides: (env_var, section, key) for every environment
            override applied by the last apply_env_overrides call.
    """

    # env var -> (section, key)
    ENV_VAR_MAPPING = {
        'CONCAT_SHA1_CHUNK_SIZE': ('hashing', 'chunk_size'),
        'CONCAT_SHA1_FAST_PATH': ('hashing', 'fast_path'),
        'CONCAT_SHA1_OUTPUT_FORMAT': ('output', 'format'),
    }

    SECTION_ALIASES = {
        'hashing': ('sha1', 'sha-1', 'hash'),
        'output': ('display',),
    }

    KNOWN_KEYS = {
        'hashing': ('chunk_size', 'fast_path'),
        'output': ('format',),
    }

    def __init__(self):
        self.applied_overrides: List[Tuple[str, str, str]] = []

    def canonical_section(self, section: str) -> str:
        name = section.strip().lower()
        for canonical, aliases in self.SECTION_ALIASES.items():
            if name == canonical or name in aliases:
                return canonical
        return name

    def normalize_config(self, config: Union[ConfigParser, Dict[str, Any]]) -> NormalizedConfig:
        """
        Lowercase and canonicalize sections and keys.

        When two raw sections fold to the same canonical name, values from a
        section already written in lowercase win over the other spellings.

        Args:
            config: ConfigParser or plain {section: {key: value}} dict

        Returns:
            dict: {canonical_section: {lowercase_key: value}}
        """
        if isinstance(config, ConfigParser):
            sections = [(name, dict(config.items(name, raw=True))) for name in config.sections()]
        else:
            sections = list(config.items())

        normalized: NormalizedConfig = {}
        for raw_name, values in sections:
            canonical = self.canonical_section(raw_name)
            folded = {key.strip().lower(): value for key, value in values.items()}
            self._warn_unknown_keys(raw_name, canonical, folded)

            target = normalized.setdefault(canonical, {})
            if raw_name == canonical:
                target.update(folded)
            else:
                logger.debug(f"Section [{raw_name}] read as [{canonical}]")
                for key, value in folded.items():
                    target.setdefault(key, value)

        return normalized

    def apply_env_overrides(self, config: NormalizedConfig) -> NormalizedConfig:
        """
        Return a copy of config with CONCAT_SHA1_* environment values applied.

        The input is not modified. Overrides create missing sections.
        """
        result = {section: dict(values) for section, values in config.items()}
        self.applied_overrides = []

        for env_var, (section, key) in self.ENV_VAR_MAPPING.items():
            value = os.environ.get(env_var)
            if value is None:
                continue
            result.setdefault(section, {})[key] = value
            self.applied_overrides.append((env_var, section, key))
            logger.info(f"Environment override applied: {env_var} -> [{section}] {key}")

        if not self.applied_overrides:
            logger.debug("No CONCAT_SHA1_* environment overrides set")
        return result

    def normalize_and_override(self, config: Union[ConfigParser, Dict[str, Any]]) -> NormalizedConfig:
        return self.apply_env_overrides(self.normalize_config(config))

    def _warn_unknown_keys(self, raw_name: str, canonical: str, values: Dict[str, Any]) -> None:
        known = self.KNOWN_KEYS.get(canonical)
        if known is None:
            return
        for key in values:
            if key not in known:
                logger.warning(f"Unknown key '{key}' in [{raw_name}]; expected one of: {', '.join(known)}")
