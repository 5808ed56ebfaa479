from __future__ import annotations

import runpy
from pathlib import Path

import svgjpeg_app.__main__ as cli_main_module


def test_main_passes_through_args(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(cli_main_module, "_cli_main", lambda argv=None: calls.append(list(argv or [])) or 0)

    rc = cli_main_module.main(["-i", "in.svg", "-w", "50"])
    assert rc == 0
    assert calls == [["-i", "in.svg", "-w", "50"]]


def test_main_reads_sys_argv_by_default(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(cli_main_module, "_cli_main", lambda argv=None: calls.append(list(argv or [])) or 0)
    monkeypatch.setattr("sys.argv", ["svgjpeg", "--quality", "90"])

    assert cli_main_module.main() == 0
    assert calls == [["--quality", "90"]]


def test_main_propagates_failure_code(monkeypatch) -> None:
    monkeypatch.setattr(cli_main_module, "_cli_main", lambda argv=None: 1)
    assert cli_main_module.main([]) == 1


def test_main_module_runpath_without_package_context() -> None:
    main_path = (
        Path(__file__).resolve().parents[1]
        / "apps"
        / "cli"
        / "svgjpeg_app"
        / "__main__.py"
    )
    result = runpy.run_path(str(main_path))
    assert "main" in result
