import atexit
import json
import logging

from maketorrent.common.logging import JSONLogFormatter, build_logging_config, config_logging


def make_record(**extra):
    record = logging.LogRecord("maketorrent.test", logging.INFO, __file__, 10, "hashed %d pieces", (3,), None)
    record.__dict__.update(extra)
    return record


def test_json_formatter_fields_and_extra():
    formatter = JSONLogFormatter(fmt_keys={"level": "levelname", "logger": "name", "message": "message"})
    line = json.loads(formatter.format(make_record(piece_size=65536)))
    assert line["level"] == "INFO"
    assert line["logger"] == "maketorrent.test"
    assert line["message"] == "hashed 3 pieces"
    assert line["piece_size"] == 65536
    assert "timestamp" in line


def test_build_logging_config(tmp_path):
    config = build_logging_config(tmp_path / "x.jsonl", verbose=True)
    assert config["handlers"]["file_json"]["filename"] == str(tmp_path / "x.jsonl")
    assert config["handlers"]["console"]["level"] == "DEBUG"
    assert build_logging_config(tmp_path / "x.jsonl")["handlers"]["console"]["level"] == "WARNING"


def test_config_logging_writes_json_lines(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        log_path = config_logging("test.jsonl", log_dir=tmp_path / "logs")
        logging.getLogger("maketorrent.test").info("written", extra={"files": 2})
        queue_handler = logging.getHandlerByName("queue_handler")
        queue_handler.listener.stop()
        atexit.unregister(queue_handler.listener.stop)
        for handler in queue_handler.listener.handlers:
            handler.close()
        lines = [json.loads(line) for line in log_path.read_text().splitlines()]
        assert lines[-1]["message"] == "written"
        assert lines[-1]["files"] == 2
        assert lines[-1]["thread_name"]
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
