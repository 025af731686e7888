import logging

LOGGER_NAME = "attendance"


def init_logging(config: dict) -> logging.Logger:
    """設定のlogging節に従ってルートロガーを初期化し、アプリ用ロガーを返す"""
    log_config = config["logging"]
    level_name = str(log_config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(level=level, format=log_config["format"])

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.debug("Logging initialized at %s level", level_name)
    return logger
