import logging
import sys

from slack_sdk import WebClient
from slack_sdk.webhook import WebhookClient

log = logging.getLogger(__name__)


class ConsoleNotifier:
    """コンソール出力による応答（フォールバック用）"""

    def send(self, message: str) -> bool:
        print(f"[出欠] {message}", file=sys.stdout)
        return True


class SlackNotifier:
    """Slackチャンネルへの投稿（変更通知用）"""

    def __init__(self, token: str, channel: str):
        self._channel = channel
        self._client = WebClient(token=token) if token else None
        self._fallback = ConsoleNotifier()

    def send(self, message: str) -> bool:
        """メッセージ送信（クライアント未設定時はフォールバック）"""
        if self._client is None:
            return self._fallback.send(message)

        try:
            self._client.chat_postMessage(channel=self._channel, text=message)
            return True
        except Exception:
            log.exception("chat_postMessage to %s failed", self._channel)
            return False


class ResponseUrlResponder:
    """スラッシュコマンド・ボタンのresponse_urlへ返信する"""

    def __init__(self, response_url: str, replace_original: bool = False, ephemeral: bool = True):
        self._client = WebhookClient(response_url) if response_url else None
        self._replace_original = replace_original
        self._response_type = "ephemeral" if ephemeral else "in_channel"
        self._fallback = ConsoleNotifier()

    def send(self, message: str) -> bool:
        if self._client is None:
            return self._fallback.send(message)

        try:
            response = self._client.send(
                text=message,
                response_type=self._response_type,
                replace_original=self._replace_original,
            )
        except Exception:
            log.exception("response_url delivery failed")
            return False
        return response.status_code == 200


class MessageUpdater:
    """既存メッセージをその場で書き換える（モーダル・ボタン経由の更新用）"""

    def __init__(self, token: str, channel: str, ts: str):
        self._client = WebClient(token=token) if token else None
        self._channel = channel
        self._ts = ts
        self._fallback = ConsoleNotifier()

    def send(self, message: str) -> bool:
        if self._client is None:
            return self._fallback.send(message)

        try:
            self._client.chat_update(channel=self._channel, ts=self._ts, text=message)
            return True
        except Exception:
            log.exception("chat_update of %s/%s failed", self._channel, self._ts)
            return False
