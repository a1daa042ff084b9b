"""Configuration defaults, environment overrides and .env loading.

WHY: The merge engine has three switches (dictionary profile, symbol
absorption, compound merging) that both library callers and the CLI set.
Keeping their defaults and environment names in one place means a .env
file next to the project changes behaviour everywhere without code edits.

HOW: python-dotenv loads the .env file on import. load_config() reads the
WORDGROUP_* variables at call time and returns an immutable MergeConfig.
MergeConfig is hashable so the rule table can be cached per configuration.

RULES:
- WORDGROUP_RULE_PROFILE selects the dictionary profile (default "ipadic")
- WORDGROUP_ABSORB_SYMBOLS / WORDGROUP_MERGE_COMPOUNDS accept
  true/false, 1/0, yes/no, on/off (case-insensitive)
- WORDGROUP_LOG_LEVEL sets the CLI log level (default "WARNING")
- An unknown profile name raises ValueError when the config is built,
  never later inside the engine
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from wordgroup.core.profiles import DEFAULT_PROFILE, get_profile

# Load .env from the directory the process runs in
load_dotenv()

ENV_RULE_PROFILE = "WORDGROUP_RULE_PROFILE"
ENV_ABSORB_SYMBOLS = "WORDGROUP_ABSORB_SYMBOLS"
ENV_MERGE_COMPOUNDS = "WORDGROUP_MERGE_COMPOUNDS"
ENV_LOG_LEVEL = "WORDGROUP_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class MergeConfig:
    """Immutable merge settings.

    Attributes:
        rule_profile: Name of the dictionary profile, a key of PROFILES.
        absorb_symbols: Fold brackets into the word they enclose.
        merge_compounds: Join noun + noun, prefix + noun and noun + suffix.
    """

    rule_profile: str = DEFAULT_PROFILE
    absorb_symbols: bool = True
    merge_compounds: bool = True

    def __post_init__(self) -> None:
        # Raises ValueError listing the known profiles
        get_profile(self.rule_profile)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError("{} must be a boolean flag, got {!r}".format(name, raw))


def load_config() -> MergeConfig:
    """Build a MergeConfig from the environment (and .env).

    Raises:
        ValueError: Unknown profile name or unparseable boolean flag.
    """
    return MergeConfig(
        rule_profile=os.getenv(ENV_RULE_PROFILE, DEFAULT_PROFILE).strip() or DEFAULT_PROFILE,
        absorb_symbols=_env_flag(ENV_ABSORB_SYMBOLS, True),
        merge_compounds=_env_flag(ENV_MERGE_COMPOUNDS, True),
    )


def load_log_level() -> str:
    return os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
