"""YAML設定ファイルの読み込みと環境変数展開"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from loopbot.config.models import (
    Config,
    LLMConfig,
    LoggingConfig,
    LoopConfig,
    MemoryConfig,
    PersonaConfig,
    SatoriConfig,
)


class ConfigError(Exception):
    """設定関連の基底例外"""


class ConfigValidationError(ConfigError):
    """設定値のバリデーションエラー"""


class EnvironmentVariableError(ConfigError):
    """環境変数が見つからないエラー"""


# 環境変数パターン: ${VAR_NAME} または ${VAR_NAME:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")

DEFAULT_PERSONALITY = (
    "You are friendly, helpful, and conversational. "
    "You communicate like a real person would in a chat conversation."
)


def expand_env_vars(value: str) -> str:
    """文字列中の ${VAR_NAME} を環境変数の値に置換する

    ``${VAR_NAME:-default}`` 形式の場合、未設定なら default を使う。

    Args:
        value: 置換対象の文字列

    Returns:
        環境変数が展開された文字列

    Raises:
        EnvironmentVariableError: 環境変数が未設定（デフォルトなし）
    """
    if not value:
        return value

    def replace_var(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        env_value = os.environ.get(var_name)
        if env_value is None:
            if default is not None:
                return default
            raise EnvironmentVariableError(
                f"Environment variable '{var_name}' is not set"
            )
        return env_value

    return ENV_VAR_PATTERN.sub(replace_var, value)


def _expand_recursive(data: Any) -> Any:
    """データ構造を再帰的に走査し、文字列中の環境変数を展開する"""
    if isinstance(data, dict):
        return {key: _expand_recursive(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_recursive(item) for item in data]
    elif isinstance(data, str):
        return expand_env_vars(data)
    else:
        return data


def _validate_required_field(data: dict[str, Any], field: str, parent: str = "") -> Any:
    """必須フィールドの存在を検証する

    Args:
        data: 検証対象のdict
        field: フィールド名
        parent: 親フィールド名（エラーメッセージ用）

    Returns:
        フィールドの値

    Raises:
        ConfigValidationError: フィールドが存在しない
    """
    if field not in data or data[field] is None:
        full_path = f"{parent}.{field}" if parent else field
        raise ConfigValidationError(f"Required field '{full_path}' is missing")
    return data[field]


def _load_loop_config(loop_data: dict[str, Any] | None) -> LoopConfig:
    """loop セクションを読み込み、値の整合性を検証する

    Raises:
        ConfigValidationError: トリム後の件数が上限を超える、または間隔が 0 以下
    """
    defaults = LoopConfig()
    if not loop_data:
        return defaults

    known = set(defaults.__dataclass_fields__)
    unknown = set(loop_data) - known
    if unknown:
        raise ConfigValidationError(
            f"Unknown field(s) in 'loop': {', '.join(sorted(unknown))}"
        )

    loop = LoopConfig(**loop_data)

    if loop.messages_keep_on_trim > loop.max_messages_in_context:
        raise ConfigValidationError(
            "'loop.messages_keep_on_trim' must not exceed "
            "'loop.max_messages_in_context'"
        )
    if loop.actions_keep_on_trim > loop.max_actions_in_context:
        raise ConfigValidationError(
            "'loop.actions_keep_on_trim' must not exceed "
            "'loop.max_actions_in_context'"
        )
    for name in (
        "max_unread_events",
        "max_recent_interacted_channels",
        "periodic_loop_interval_seconds",
    ):
        if getattr(loop, name) <= 0:
            raise ConfigValidationError(f"'loop.{name}' must be positive")
    for name in ("loop_continue_delay_seconds", "sleep_duration_seconds"):
        if getattr(loop, name) < 0:
            raise ConfigValidationError(f"'loop.{name}' must not be negative")

    return loop


def load_config(path: str | Path) -> Config:
    """設定ファイルを読み込む

    Args:
        path: config.yaml のパス

    Returns:
        Config オブジェクト

    Raises:
        FileNotFoundError: ファイルが存在しない
        ConfigValidationError: 必須項目が欠落
        EnvironmentVariableError: 環境変数が未設定
        yaml.YAMLError: YAML構文エラー
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw_data = yaml.safe_load(f) or {}

    # 環境変数を展開
    data = _expand_recursive(raw_data)

    # 必須セクションの検証
    satori_data = _validate_required_field(data, "satori")
    llm_data = _validate_required_field(data, "llm")
    persona_data = _validate_required_field(data, "persona")
    memory_data = _validate_required_field(data, "memory")

    satori = SatoriConfig(
        ws_url=_validate_required_field(satori_data, "ws_url", "satori"),
        api_url=_validate_required_field(satori_data, "api_url", "satori"),
        token=satori_data.get("token") or None,
    )

    # api_key / base_url の空チェックはプランナー生成時に行う
    llm = LLMConfig(
        model=_validate_required_field(llm_data, "model", "llm"),
        api_key=llm_data.get("api_key") or "",
        base_url=llm_data.get("base_url") or "",
        temperature=llm_data.get("temperature", 0.7),
        max_tokens=llm_data.get("max_tokens", 1000),
        disable_think=bool(llm_data.get("disable_think", False)),
    )

    persona = PersonaConfig(
        name=_validate_required_field(persona_data, "name", "persona"),
        personality=persona_data.get("personality") or DEFAULT_PERSONALITY,
        response_language=persona_data.get("response_language") or None,
    )

    memory = MemoryConfig(
        database_path=_validate_required_field(memory_data, "database_path", "memory"),
    )

    loop = _load_loop_config(data.get("loop"))

    # LoggingConfig (optional)
    logging_config: LoggingConfig | None = None
    logging_data = data.get("logging")
    if logging_data:
        logging_config = LoggingConfig(
            level=logging_data.get("level", "INFO"),
            format=logging_data.get(
                "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ),
            loggers=logging_data.get("loggers"),
            debug_llm_messages=logging_data.get("debug_llm_messages", False),
        )

    return Config(
        satori=satori,
        llm=llm,
        persona=persona,
        memory=memory,
        loop=loop,
        logging=logging_config,
    )
