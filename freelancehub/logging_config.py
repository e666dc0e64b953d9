# freelancehub/logging_config.py
import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """루트 로거에 스트림 핸들러를 하나만 설치합니다. 여러 번 호출해도 핸들러가 중복되지 않습니다."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in root.handlers:
        if getattr(handler, "_freelancehub", False):
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._freelancehub = True
    root.addHandler(handler)

    # SQL 로그는 DEBUG 에서도 너무 시끄러우므로 WARNING 으로 고정
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
