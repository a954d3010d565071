import pytest

from xcl.log_file_writer import LogFileWriter, slice_name
from xcl.log_format import LogContext, LogLevel
from xcl.log_manager import LogManageConfig, LogManager


def _ctx(tag="main"):
    return LogContext(level=LogLevel.INFO, tag=tag)


def test_slice_name_of_plain_log():
    assert slice_name("app.log") == "app.[slice1].log"


def test_slice_name_increments_part():
    assert slice_name("app.[slice1].log") == "app.[slice2].log"
    assert slice_name("app.[slice9].log") == "app.[slice10].log"


@pytest.mark.parametrize("name", ["app.v2.log", "app.[slice1x].log", "app.[slice3]x.log", "noext"])
def test_slice_name_rejects_other_shapes(name):
    assert slice_name(name) is None


def test_rejects_format_without_log_extension(tmp_path):
    with pytest.raises(ValueError):
        LogFileWriter(str(tmp_path / "app.txt"))


def test_writes_to_file_named_from_format(tmp_path):
    with LogFileWriter(str(tmp_path / "app-${tag}.log")) as writer:
        writer.write(b"first\n", _ctx("main"))
        writer.write("second\n", _ctx("main"))
        assert writer.name == "app-main.log"
    assert (tmp_path / "app-main.log").read_bytes() == b"first\nsecond\n"


def test_empty_write_creates_no_file(tmp_path):
    with LogFileWriter(str(tmp_path / "app.log")) as writer:
        writer.write(b"", _ctx())
    assert list(tmp_path.iterdir()) == []


def test_single_limit_slices_files(tmp_path):
    manager = LogManager(LogManageConfig(single_log_limit=10))
    data = b"x" * 25
    with LogFileWriter(str(tmp_path / "app.log"), manager) as writer:
        writer.write(data, _ctx())
    sizes = {p.name: p.stat().st_size for p in tmp_path.iterdir()}
    assert set(sizes) == {"app.log", "app.[slice1].log", "app.[slice2].log"}
    assert sizes["app.log"] == 10
    assert sizes["app.[slice1].log"] == 10
    assert sum(sizes.values()) == len(data)


def test_total_limit_discards_oldest_logs(tmp_path):
    manager = LogManager(LogManageConfig(single_log_limit=10, total_log_limit=20))
    with LogFileWriter(str(tmp_path / "app.log"), manager) as writer:
        writer.write(b"y" * 35, _ctx())
    files = list(tmp_path.glob("*.log"))
    assert len(files) == 2
    assert sum(p.stat().st_size for p in files) == 15
    assert (tmp_path / "app.[slice3].log").stat().st_size == 5
    assert manager.total_log_size <= 20


def test_change_name_format_starts_new_file(tmp_path):
    with LogFileWriter(str(tmp_path / "one.log")) as writer:
        writer.write(b"a", _ctx())
        writer.change_name_format("two.log")
        writer.write(b"b", _ctx())
        assert writer.name == "two.log"
    assert (tmp_path / "one.log").read_bytes() == b"a"
    assert (tmp_path / "two.log").read_bytes() == b"b"


def test_write_after_close_raises(tmp_path):
    writer = LogFileWriter(str(tmp_path / "app.log"))
    writer.write(b"a", _ctx())
    writer.close()
    with pytest.raises(ValueError):
        writer.write(b"b", _ctx())
    assert (tmp_path / "app.log").read_bytes() == b"a"