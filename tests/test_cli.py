import io
import json
from pathlib import Path

import pytest

from flat_join import __version__
from flat_join.__main__ import main


ENTRIES = [
    {"type": "topic", "id": "t1", "title": "First"},
    {"type": "vote", "id": "t1-v1", "value": 1},
    {"type": "comment", "id": "t1-c1", "text": "Hi"},
    {"type": "topic", "id": "t2", "title": "Second"},
    {"type": "vote", "id": "t2-v1", "value": 2},
]
CHILD_ARGS = ["--primary", "topic", "--child", "vote=votes", "--child", "comment=comments"]


@pytest.fixture
def records_file(tmp_path: Path) -> Path:
    path = tmp_path / "records.json"
    _ = path.write_text(json.dumps(ENTRIES), encoding="utf-8")
    return path


def test_cli_joins_file(records_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(records_file), *CHILD_ARGS]) == 0

    output = json.loads(capsys.readouterr().out)
    assert [joined["id"] for joined in output] == ["t1", "t2"]
    assert output[0]["comments"] == [ENTRIES[2]]
    assert output[1]["comments"] == []


def test_cli_reads_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(json.dumps(ENTRIES[1:])))

    assert main(CHILD_ARGS) == 0

    output = json.loads(capsys.readouterr().out)
    assert output == [{**ENTRIES[3], "votes": [ENTRIES[4]], "comments": []}]


def test_cli_reports_orphan_as_tagged_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "orphans.json"
    _ = path.write_text(json.dumps(ENTRIES[1:]), encoding="utf-8")

    assert main([str(path), *CHILD_ARGS, "--on-orphan", "fail"]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    error = json.loads(captured.err.strip().splitlines()[-1])
    assert error["kind"] == "orphaned_record"
    assert error["index"] == 0
    assert error["record"] == ENTRIES[1]


def test_cli_prefix_matcher_uses_separator(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rows = [
        {"type": "topic", "id": "t1"},
        {"type": "vote", "id": "t10/v1"},
        {"type": "vote", "id": "t1/v2"},
    ]
    path = tmp_path / "rows.json"
    _ = path.write_text(json.dumps(rows), encoding="utf-8")

    assert main([str(path), "--primary", "topic", "--child", "vote=votes", "--match", "prefix", "--sep", "/"]) == 0

    (joined,) = json.loads(capsys.readouterr().out)
    assert joined["votes"] == [rows[2]]


def test_cli_rejects_bad_child_argument(records_file: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _ = main([str(records_file), "--primary", "topic", "--child", "votes"])
    assert excinfo.value.code == 2


def test_cli_rejects_invalid_child_map(records_file: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _ = main([str(records_file), "--primary", "topic", "--child", "topic=topics"])
    assert excinfo.value.code == 2


def test_cli_missing_file_fails(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    assert main([str(tmp_path / "missing.json"), *CHILD_ARGS]) == 1
    assert "cannot read records" in caplog.text


def test_cli_rejects_non_array_input(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "object.json"
    _ = path.write_text('{"type": "topic"}', encoding="utf-8")

    assert main([str(path), *CHILD_ARGS]) == 1
    assert "input must be a JSON array of objects" in caplog.text


def test_cli_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _ = main(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_cli_rejects_non_utf8_file(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "latin1.json"
    _ = path.write_bytes(b'[{"type": "topic", "id": "t\xff"}]')

    assert main([str(path), "--primary", "topic"]) == 1
    assert "cannot read records" in caplog.text


def test_cli_numeric_ids_with_default_matcher_are_orphans(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "numeric.json"
    _ = path.write_text('[{"type": "topic", "id": 1}, {"type": "vote", "id": 1}]', encoding="utf-8")

    assert main([str(path), "--primary", "topic", "--child", "vote=votes"]) == 0

    assert json.loads(capsys.readouterr().out) == [{"type": "topic", "id": 1, "votes": []}]


def test_cli_numeric_ids_join_with_equals_matcher(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "numeric.json"
    _ = path.write_text('[{"type": "topic", "id": 1}, {"type": "vote", "id": 1}]', encoding="utf-8")

    assert main([str(path), "--primary", "topic", "--child", "vote=votes", "--match", "equals"]) == 0

    (joined,) = json.loads(capsys.readouterr().out)
    assert joined["votes"] == [{"type": "vote", "id": 1}]
