"""Tests for the command line surface."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from schema_scraper import cli
from schema_scraper.file_paths import FilePathTables

from conftest import ROOT, FakeSession

VERSION = "2019_1"


@pytest.fixture(autouse=True)
def run_in_tmp(tmp_path, monkeypatch):
    """Log files land in the working directory by default."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def calls(monkeypatch) -> list:
    """Replace every driver with a mock that records the order it ran in."""
    order: list = []

    def record(name):
        return lambda *args, **kwargs: order.append((name, args[0]))

    monkeypatch.setattr(cli, "generate_version", AsyncMock(side_effect=record("generate_version")))
    monkeypatch.setattr(cli, "generate_namespace", AsyncMock(side_effect=record("generate_namespace")))
    monkeypatch.setattr(cli, "generate_single_file", AsyncMock(side_effect=record("generate_single_file")))
    monkeypatch.setattr(cli, "create_file_path_table", AsyncMock(side_effect=record("create_file_path_table")))
    monkeypatch.setattr(cli, "create_index_files", MagicMock(side_effect=record("create_index_files")))
    monkeypatch.setattr(cli, "fix_imports", MagicMock(side_effect=record("fix_imports")))
    return order


def test_flags_run_in_fixed_order(calls, tmp_path) -> None:
    exit_code = cli.main([
        "--fix-imports-for-version",
        "--create-single-file", "--link", "https://example.com/Browser2019_1/schema/record/a.html",
        "--create-files-for-single-version",
        "--create-index-files-for-single-version",
        "--netsuite-version", VERSION,
        "--output-dir", str(tmp_path),
    ])

    assert exit_code == 0
    assert calls == [
        ("generate_version", VERSION),
        ("generate_single_file", "https://example.com/Browser2019_1/schema/record/a.html"),
        ("create_index_files", str(tmp_path)),
        ("fix_imports", str(tmp_path)),
    ]


def test_all_versions(calls) -> None:
    assert cli.main(["--create-index-files-for-all-versions"]) == 0
    assert [name for name, _ in calls] == ["create_index_files"] * len(cli.VERSIONS)


def test_flag_without_its_parameter_is_skipped(calls, caplog) -> None:
    assert cli.main(["--create-file-path-object-file", "--create-files-for-namespace"]) == 0
    assert calls == []
    assert "needs --netsuite-version" in caplog.text
    assert "needs --namespace-link" in caplog.text


def test_no_flags_does_nothing(calls) -> None:
    assert cli.main([]) == 0
    assert calls == []


def test_uncaught_error_exits_non_zero(tmp_path) -> None:
    exit_code = cli.main([
        "--fix-imports-for-version",
        "--netsuite-version", VERSION,
        "--output-dir", str(tmp_path / "missing"),
    ])
    assert exit_code == 1


def test_index_files_for_real_tree(tmp_path) -> None:
    (tmp_path / "src" / VERSION / "lists").mkdir(parents=True)

    assert cli.main([
        "--create-index-files-for-single-version",
        "--netsuite-version", VERSION,
        "--output-dir", str(tmp_path),
    ]) == 0
    assert (tmp_path / "src" / VERSION / "index.ts").read_text(encoding="utf-8") == "export * from './lists';"


def test_broken_page_is_kept_in_log_files(tmp_path, monkeypatch, site) -> None:
    session = FakeSession(site)
    monkeypatch.setattr(cli, "browser_session", lambda **kwargs: session())
    tables = FilePathTables(tmp_path / "tables")
    tables.set(VERSION, {})
    tables.save(VERSION)
    broken_link = f"{ROOT}schema/record/broken.html"

    assert cli.main([
        "--create-single-file", "--link", broken_link,
        "--table-dir", str(tmp_path / "tables"),
        "--output-dir", str(tmp_path / "types"),
        "--log-dir", str(tmp_path / "logs"),
    ]) == 0

    combined = (tmp_path / "logs" / "combined.log").read_text(encoding="utf-8")
    assert f"Failed to grab data from page, broken link at:\n{broken_link}" in combined
    assert f"Creating file for page {broken_link}..." in combined

    errors = (tmp_path / "logs" / "error.log").read_text(encoding="utf-8")
    assert "Error while processing page" in errors
    assert "broken link at" not in errors
