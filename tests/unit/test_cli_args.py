from __future__ import annotations

from pathlib import Path

import pytest

from hwsubmit.cli.submit import main, parse_args


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["-c"],
        ["-s"],
        ["1"],
        ["-c", "6"],
        ["-c", "rm"],
        ["-c", "-s", "1"],
        ["-x", "1"],
    ],
)
def test_usage_errors_exit_nonzero_without_touching_files(
    argv: list[str], tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys
) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as exc:
        main(argv)

    assert exc.value.code != 0
    assert "usage:" in capsys.readouterr().err
    assert list(tmp_path.iterdir()) == []


def test_valid_arguments() -> None:
    args = parse_args(["-c", "3"])
    assert (args.mode, args.part) == ("collect", "3")

    args = parse_args(["-s", "5", "--config", "site.json"])
    assert (args.mode, args.part, args.config) == ("submit", "5", "site.json")


def test_outside_project_root_is_an_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("HWSUBMIT_CONFIG", raising=False)
    config = tmp_path / "site.json"
    config.write_text('{"root_markers": {"build": "no-such-marker-dir"}}', encoding="utf-8")

    assert main(["-c", "1", "--config", str(config)]) == 1


def test_unknown_manifest_placeholder_is_reported(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog
) -> None:
    monkeypatch.chdir(tmp_path)
    config = tmp_path / "site.json"
    config.write_text('{"manifest_name": "MANIFEST.{user}"}', encoding="utf-8")

    assert main(["-c", "1", "--config", str(config)]) == 1
    assert "manifest_name" in caplog.text
    assert not (tmp_path / "MANIFEST.rm").exists()
