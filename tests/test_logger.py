from datetime import datetime, timedelta

import pytest

from xcl.log_format import LogLevel
from xcl.log_manager import LogManageConfig
from xcl.logger import LogConfig, Logger


@pytest.fixture
def logger():
    instance = Logger()
    yield instance
    instance.close()


def test_default_format(logger, capsys):
    logger.configure(LogConfig(tag="app"))
    logger.echo(LogLevel.INFO, "/src/main.c", 42, "main", "hi")
    out = capsys.readouterr().out
    stamp, rest = out[:23], out[23:]
    assert rest == " [app] [info] main.c:42 main hi\n"
    parsed = datetime.strptime(stamp, "%Y-%m-%d %H:%M:%S.%f")
    assert abs(parsed - datetime.now()) < timedelta(minutes=5)


def test_empty_tag_becomes_null(logger, capsys):
    logger.configure(LogConfig(tag="", log_fmt="${tag}"))
    logger.write(LogLevel.INFO, "a.c", 1, "f", "m")
    assert capsys.readouterr().out == "null\n"


def test_warning_goes_to_stderr(logger, capsys):
    logger.configure(LogConfig(log_fmt="[${level}] ${message}"))
    logger.write(LogLevel.WARNING, "a.c", 1, "f", "careful")
    captured = capsys.readouterr()
    assert captured.err == "[warning] careful\n"
    assert captured.out == ""


def test_show_level_filters(logger, capsys):
    logger.configure(LogConfig(log_fmt="${message}", show_level=LogLevel.INFO))
    logger.write(LogLevel.DEBUG, "a.c", 1, "f", "hidden")
    logger.echo(LogLevel.DEBUG, "a.c", 1, "f", "hidden")
    logger.write(LogLevel.INFO, "a.c", 1, "f", "shown")
    assert capsys.readouterr().out == "shown\n"


def test_fatal_level_is_not_handled(logger, capsys):
    logger.configure(LogConfig(log_fmt="${message}"))
    logger.write(LogLevel.FATAL, "a.c", 1, "f", "boom")
    captured = capsys.readouterr()
    assert captured.out == "" and captured.err == ""


def test_long_message_is_truncated(logger, capsys):
    logger.configure(LogConfig(log_fmt="${message}"))
    logger.echo(LogLevel.INFO, "a.c", 1, "f", "x" * 5000)
    out = capsys.readouterr().out
    assert len(out) == 4097
    assert out.endswith("x\n")


def test_writes_to_file_at_write_level(logger, tmp_path, capsys):
    path = tmp_path / "app.log"
    logger.configure(
        LogConfig(
            file_fmt=str(path),
            log_fmt="${message}",
            write_level=LogLevel.INFO,
            show_level=LogLevel.ERROR,
        )
    )
    logger.write(LogLevel.DEBUG, "a.c", 1, "f", "skipped")
    logger.write(LogLevel.INFO, "a.c", 1, "f", "kept")
    assert path.read_text() == "kept\n"
    assert capsys.readouterr().out == ""


def test_echo_never_writes_file(logger, tmp_path):
    path = tmp_path / "app.log"
    logger.configure(LogConfig(file_fmt=str(path), log_fmt="${message}", write_level=LogLevel.VERBOSE))
    logger.echo(LogLevel.INFO, "a.c", 1, "f", "console")
    assert not path.exists()


def test_writing_requires_file_format(logger):
    with pytest.raises(ValueError):
        logger.configure(LogConfig(write_level=LogLevel.INFO))


def test_writing_requires_log_extension(logger, tmp_path):
    with pytest.raises(ValueError):
        logger.configure(LogConfig(file_fmt=str(tmp_path / "app.txt"), write_level=LogLevel.INFO))


def test_reconfigure_name_format(logger, tmp_path):
    base = dict(log_fmt="${message}", write_level=LogLevel.INFO, show_level=LogLevel.ERROR)
    logger.configure(LogConfig(file_fmt=str(tmp_path / "one.log"), **base))
    logger.write(LogLevel.INFO, "a.c", 1, "f", "first")
    logger.configure(LogConfig(file_fmt=str(tmp_path / "two.log"), **base))
    logger.write(LogLevel.INFO, "a.c", 1, "f", "second")
    assert (tmp_path / "one.log").read_text() == "first\n"
    assert (tmp_path / "two.log").read_text() == "second\n"


def test_reconfigure_with_manager(logger, tmp_path):
    base = dict(log_fmt="${message}", write_level=LogLevel.INFO, show_level=LogLevel.ERROR)
    logger.configure(LogConfig(file_fmt=str(tmp_path / "app.log"), **base))
    logger.configure(
        LogConfig(file_fmt=str(tmp_path / "app.log"), **base),
        LogManageConfig(single_log_limit=4),
    )
    logger.write(LogLevel.INFO, "a.c", 1, "f", "abcdefg")
    sizes = sorted(p.stat().st_size for p in tmp_path.glob("*.log"))
    assert sum(sizes) == len("abcdefg\n")
    assert max(sizes) <= 4


def test_disabling_write_level_stops_file_output(logger, tmp_path):
    path = tmp_path / "app.log"
    logger.configure(
        LogConfig(file_fmt=str(path), log_fmt="${message}", write_level=LogLevel.INFO, show_level=LogLevel.ERROR)
    )
    logger.write(LogLevel.INFO, "a.c", 1, "f", "one")
    logger.configure(LogConfig(log_fmt="${message}", show_level=LogLevel.ERROR))
    logger.write(LogLevel.INFO, "a.c", 1, "f", "two")
    assert path.read_text() == "one\n"
    assert logger.write_level is None


def test_close_keeps_printing(logger, tmp_path, capsys):
    path = tmp_path / "app.log"
    logger.configure(LogConfig(file_fmt=str(path), log_fmt="${message}", write_level=LogLevel.INFO))
    logger.close()
    logger.write(LogLevel.INFO, "a.c", 1, "f", "after")
    assert capsys.readouterr().out == "after\n"
    assert not path.exists()