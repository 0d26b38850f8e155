"""設定管理モジュール"""

from loopbot.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    expand_env_vars,
    load_config,
)
from loopbot.config.models import (
    Config,
    LLMConfig,
    LoggingConfig,
    LoopConfig,
    MemoryConfig,
    PersonaConfig,
    SatoriConfig,
)

__all__ = [
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "EnvironmentVariableError",
    "LLMConfig",
    "LoggingConfig",
    "LoopConfig",
    "MemoryConfig",
    "PersonaConfig",
    "SatoriConfig",
    "expand_env_vars",
    "load_config",
]
