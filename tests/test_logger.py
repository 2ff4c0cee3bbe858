import io

from models.enums import LogLevel, LogCategory
from utils.logger import Logger


def make_logger(level=LogLevel.INFO):
    stream = io.StringIO()
    return Logger(min_level=level, use_colors=False, stream=stream), stream


def test_message_and_details_tree():
    logger, stream = make_logger()

    logger.for_category(LogCategory.ALARM).info("Sunrise alarm started", source="scheduler", run=3)

    lines = stream.getvalue().splitlines()
    assert "ALARM" in lines[0]
    assert lines[0].endswith("Sunrise alarm started")
    assert lines[1].strip() == "├─ source: scheduler"
    assert lines[2].strip() == "└─ run: 3"


def test_below_min_level_is_dropped():
    logger, stream = make_logger(LogLevel.WARN)
    bound = logger.for_category(LogCategory.WEATHER)

    bound.info("quiet")
    bound.warn("loud")

    assert "quiet" not in stream.getvalue()
    assert "loud" in stream.getvalue()


def test_exc_info_appends_traceback():
    logger, stream = make_logger()

    try:
        raise RuntimeError("render failed")
    except RuntimeError:
        logger.error(LogCategory.HARDWARE, "Render error", exc_info=True)

    assert "RuntimeError: render failed" in stream.getvalue()


def test_category_override():
    logger, stream = make_logger()
    logger.for_category(LogCategory.API).log("moved", category=LogCategory.SYSTEM)
    assert "SYSTEM" in stream.getvalue()
