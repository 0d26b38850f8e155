"""Domain exceptions."""


class CycleCancelledError(Exception):
    """推論・行動サイクルが新しいサイクルに置き換えられた場合に発生する例外

    エラーではなく「このサイクルはもう不要」という通知であり、
    ステップ関数で吸収される。
    """

    def __init__(self, message: str = "") -> None:
        """初期化

        Args:
            message: メッセージ（オプション）
        """
        super().__init__(message or "Cycle was superseded by a newer cycle")
