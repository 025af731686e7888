"""出欠ボット - エントリーポイント"""
import argparse
import os
import sys

from dotenv import load_dotenv

from graph.graph import handle_in_out
from graph.state import Directive, ResponseContext
from services.config_loader import load_config
from services.google_sheet import GoogleSheet, open_worksheet
from services.logging_setup import init_logging
from services.memory_sheet import MemorySheet
from services.slack_client import ConsoleNotifier, MessageUpdater, ResponseUrlResponder, SlackNotifier


def create_responder(args, slack_token: str):
    """応答先を選ぶ: response_url > メッセージ書き換え > コンソール"""
    if args is None:
        return ConsoleNotifier()
    if args.response_url:
        return ResponseUrlResponder(args.response_url, replace_original=args.replace_original)
    if args.update_channel and args.update_ts:
        return MessageUpdater(token=slack_token, channel=args.update_channel, ts=args.update_ts)
    return ConsoleNotifier()


def create_services(config: dict, args=None):
    """設定に基づいてシートと応答先・変更通知先を生成"""
    load_dotenv()

    # 出欠シート
    sheet_config = config["sheet"]
    if sheet_config["backend"] == "memory":
        sheet = MemorySheet.from_config(sheet_config["memory"])
    else:
        worksheet = open_worksheet(
            os.getenv("SPREADSHEET_ID", sheet_config["spreadsheet_id"]),
            sheet_config["worksheet"],
        )
        sheet = GoogleSheet(worksheet, sheet_config)

    # 応答先・変更通知
    slack_config = config["slack"]
    slack_token = os.getenv("SLACK_BOT_TOKEN", "")
    slack_channel = os.getenv("SLACK_NOTIFY_CHANNEL", slack_config.get("notify_channel", ""))
    if slack_config["enabled"] and slack_token and slack_channel:
        notifier = SlackNotifier(token=slack_token, channel=slack_channel)
    else:
        notifier = ConsoleNotifier()

    return sheet, create_responder(args, slack_token), notifier


def make_change_notice(context: ResponseContext, notifier):
    """更新成功後に別チャンネルへ知らせるコールバックを作る"""
    def notify():
        message = f"{context.username} marked themselves {context.command.value}"
        if context.text:
            message += f": {context.text}"
        notifier.send(message)
    return notify


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Mark attendance in or out for an event")
    parser.add_argument("--config", default="config.yaml", help="YAML config path")
    parser.add_argument("--response-url", default="", help="Slack response_url to reply to")
    parser.add_argument(
        "--replace-original",
        action="store_true",
        help="replace the message that triggered the response_url",
    )
    parser.add_argument("--update-channel", default="", help="channel of a message to update in place")
    parser.add_argument("--update-ts", default="", help="ts of a message to update in place")
    parser.add_argument("command", choices=[d.value for d in Directive])
    parser.add_argument("username")
    parser.add_argument("text", nargs="*", help="optional date (m/d[/yyyy]) followed by a reason")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """メイン起動処理"""
    args = parse_args(argv)
    config = load_config(args.config)
    logger = init_logging(config)

    sheet, responder, notifier = create_services(config, args)
    context = ResponseContext(
        username=args.username,
        command=Directive(args.command),
        text=" ".join(args.text),
    )

    response = handle_in_out(
        context,
        sheet,
        responder,
        on_success=make_change_notice(context, notifier),
        settings=config,
        logger=logger,
    )
    return 1 if response.kind == "failure" else 0


if __name__ == "__main__":
    sys.exit(main())
