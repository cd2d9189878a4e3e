"""Rules configuration for tlsaudit."""

from .loader import RulesConfigError, load_rules_config, merge_rules
from .models import DEFAULT_RULES, RulesConfig

__all__ = [
    "DEFAULT_RULES",
    "RulesConfig",
    "RulesConfigError",
    "load_rules_config",
    "merge_rules",
]
