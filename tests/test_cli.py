"""CLI parser and command behaviour tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from repomancer import cli
from repomancer.cli import _build_parser
from repomancer.errors import RepositoryNotFound


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "analyze", "acme/demo"])
    assert args.verbose is True
    assert args.command == "analyze"
    assert args.locator == "acme/demo"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["analyze", "acme/demo", "--verbose"])
    assert args.verbose is True


def test_cli_analyze_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        ["analyze", "acme/demo", "--token", "t", "--format", "json", "-o", "out.md"]
    )
    assert args.token == "t"
    assert args.format == "json"
    assert args.output == Path("out.md")


def test_cli_rejects_unknown_format() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["analyze", "acme/demo", "--format", "html"])


def test_cli_serve_defaults() -> None:
    args = _build_parser().parse_args(["serve"])
    assert args.host == "127.0.0.1"
    assert args.port == 8000


class _StubAssembler:
    def __init__(self, profile=None, error: Exception | None = None) -> None:
        self.profile = profile
        self.error = error
        self.locators: list[str] = []

    async def analyze(self, locator: str):
        self.locators.append(locator)
        if self.error is not None:
            raise self.error
        return self.profile


def test_analyze_writes_report_to_output(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, fake_provider, clock
) -> None:
    from repomancer.assembler import ProfileAssembler

    provider = fake_provider(file_tree=["index.ts"])
    assembler = ProfileAssembler(lambda: provider, clock=clock)
    monkeypatch.setattr(
        cli.ProfileAssembler, "from_config", classmethod(lambda cls, config, token=None: assembler)
    )
    output = tmp_path / "reports" / "demo.md"

    cli.main(["analyze", "acme/demo", "--config", str(tmp_path), "-o", str(output)])

    report = output.read_text(encoding="utf-8")
    assert report.startswith("# RepoMancer Analysis: acme/demo")
    assert "- `index.ts`" in report


def test_analyze_exits_on_missing_repository(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    stub = _StubAssembler(error=RepositoryNotFound("GitHub resource not found: /repos/acme/gone"))
    monkeypatch.setattr(
        cli.ProfileAssembler, "from_config", classmethod(lambda cls, config, token=None: stub)
    )

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["analyze", "acme/gone", "--config", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "not found" in capsys.readouterr().err
    assert stub.locators == ["acme/gone"]


def test_cli_accepts_log_file_before_or_after_command() -> None:
    parser = _build_parser()

    before = parser.parse_args(["--log-file", "run.log", "analyze", "acme/demo"])
    after = parser.parse_args(["serve", "--log-file", "run.log"])
    absent = parser.parse_args(["serve"])

    assert before.log_file == Path("run.log")
    assert after.log_file == Path("run.log")
    assert absent.log_file is None


def test_analyze_writes_log_records_to_log_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, fake_provider, clock
) -> None:
    from repomancer.assembler import ProfileAssembler

    provider = fake_provider()
    assembler = ProfileAssembler(lambda: provider, clock=clock)
    monkeypatch.setattr(
        cli.ProfileAssembler, "from_config", classmethod(lambda cls, config, token=None: assembler)
    )
    log_file = tmp_path / "repomancer.log"

    cli.main(
        [
            "analyze",
            "acme/demo",
            "--config",
            str(tmp_path),
            "-o",
            str(tmp_path / "out.md"),
            "--log-file",
            str(log_file),
        ]
    )

    for handler in logging.getLogger("repomancer").handlers:
        handler.close()
    assert "Analyzing repository: acme/demo" in log_file.read_text(encoding="utf-8")


def test_serve_passes_loaded_config_to_service(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import repomancer.service as service

    (tmp_path / ".repomancer.yml").write_text("analysis:\n  dependency_threshold: 7\n", encoding="utf-8")
    calls = []
    monkeypatch.setattr(
        service, "run_service", lambda config, host, port: calls.append((config, host, port))
    )

    cli.main(["serve", "--config", str(tmp_path), "--port", "9000"])

    assert len(calls) == 1
    config, host, port = calls[0]
    assert config.analysis.dependency_threshold == 7
    assert (host, port) == ("127.0.0.1", 9000)


def test_serve_exits_on_invalid_config(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / ".repomancer.yml").write_text("- not\n- a mapping\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["serve", "--config", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "mapping" in capsys.readouterr().err
