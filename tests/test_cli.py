from __future__ import annotations

from pathlib import Path

import pytest

from winfirstboot import cli


def test_dry_run_touches_nothing_but_the_log(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(cli, "WindowsHost", lambda: pytest.fail("host must not be created on a dry run"))

    assert cli.main(["--base-dir", str(tmp_path), "--dry-run", "--skip", "network"]) == 0

    content = (tmp_path / "bootstrap.log").read_text(encoding="utf-8")
    assert "Dry run: would run stages execution-policy, remoting, credssp, config, disks, post-script" in content


def test_non_windows_platform_is_refused(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(cli.platform, "system", lambda: "Linux")

    assert cli.main(["--base-dir", str(tmp_path)]) == 1

    last = (tmp_path / "bootstrap.log").read_text(encoding="utf-8").splitlines()[-1]
    assert " - ERROR    - Provisioning failed: unsupported platform Linux" in last


def test_windows_run_uses_windows_host(tmp_path: Path, monkeypatch, host) -> None:
    monkeypatch.setattr(cli.platform, "system", lambda: "Windows")
    monkeypatch.setattr(cli, "WindowsHost", lambda: host)

    assert cli.main(["--base-dir", str(tmp_path), "--skip", "remoting", "--skip", "credssp"]) == 0

    assert host.called("enable_remoting") == []
    assert host.called("set_execution_policy") == [("set_execution_policy", "Unrestricted")]


def test_paths_default_to_base_dir_and_accept_overrides(tmp_path: Path) -> None:
    parser = cli.build_parser()
    args = parser.parse_args(["--base-dir", str(tmp_path), "--post-script", str(tmp_path / "other.py")])

    paths = cli.resolve_paths(args)

    assert paths.config_file == tmp_path.resolve() / "config.json"
    assert paths.log_file == tmp_path.resolve() / "bootstrap.log"
    assert paths.post_script == tmp_path / "other.py"


def test_log_level_filters_records(tmp_path: Path) -> None:
    assert cli.main(["--base-dir", str(tmp_path), "--dry-run", "--log-level", "warning"]) == 0

    assert not (tmp_path / "bootstrap.log").exists()


def test_unknown_stage_rejected() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["--skip", "everything"])


def test_unusable_log_location_reported_on_console(tmp_path: Path, capsys) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")

    assert cli.main(["--base-dir", str(blocker / "sub"), "--dry-run"]) == 1

    out = capsys.readouterr().out.splitlines()
    assert " - ERROR    - Provisioning failed: " in out[-1]
