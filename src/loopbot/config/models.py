"""設定データクラス"""

from dataclasses import dataclass, field


@dataclass
class SatoriConfig:
    """Satori 接続設定"""

    ws_url: str
    api_url: str
    token: str | None = None


@dataclass
class LLMConfig:
    """LLM設定（LiteLLMのacompletionに渡すdict）"""

    model: str
    api_key: str = ""
    base_url: str = ""
    temperature: float = 0.7
    max_tokens: int = 1000
    disable_think: bool = False


@dataclass
class PersonaConfig:
    """ペルソナ設定"""

    name: str
    personality: str
    response_language: str | None = None


@dataclass
class MemoryConfig:
    """記憶設定"""

    database_path: str


@dataclass
class LoopConfig:
    """判断ループ設定

    Attributes:
        max_unread_events: チャンネルごとの未読イベント上限
        max_messages_in_context: 会話履歴の上限（超過時にトリム）
        messages_keep_on_trim: トリム時に残す会話履歴数
        max_actions_in_context: アクション履歴の上限（超過時にトリム）
        actions_keep_on_trim: トリム時に残すアクション履歴数
        max_recent_interacted_channels: 最近操作したチャンネルの記録数
        periodic_loop_interval_seconds: 未読チャンネル巡回の間隔
        loop_continue_delay_seconds: 継続サイクル間の待機時間
        sleep_duration_seconds: sleep アクションのデフォルト時間
    """

    max_unread_events: int = 20
    max_messages_in_context: int = 20
    messages_keep_on_trim: int = 5
    max_actions_in_context: int = 50
    actions_keep_on_trim: int = 20
    max_recent_interacted_channels: int = 5
    periodic_loop_interval_seconds: float = 60.0
    loop_continue_delay_seconds: float = 1.0
    sleep_duration_seconds: float = 30.0


@dataclass
class LoggingConfig:
    """ログ設定"""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    loggers: dict[str, str] | None = None
    debug_llm_messages: bool = False


@dataclass
class Config:
    """アプリケーション設定"""

    satori: SatoriConfig
    llm: LLMConfig
    persona: PersonaConfig
    memory: MemoryConfig
    loop: LoopConfig = field(default_factory=LoopConfig)
    logging: LoggingConfig | None = None
