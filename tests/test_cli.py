"""Tests for CLI commands — git is replaced by an in-memory blame provider."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from authorship.cli import main
from authorship.exceptions import BlameUnavailable
from authorship.testing import FakeBlameProvider, blame_from_rows

REPO = "github.com/acme/app"
LIB = "github.com/acme/lib"

D1 = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)
D2 = datetime(2024, 3, 5, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def fake_git():
    provider = FakeBlameProvider(
        {
            "a.go": blame_from_rows(
                "a.go",
                [
                    ("a" * 59, "alice@x.io", "c1" * 20, D1),
                    ("b" * 39, "bob@x.io", "c2" * 20, D2),
                ],
            ),
            "bin.dat": BlameUnavailable("bin.dat", "binary content"),
        }
    )
    with patch("authorship.cli.GitBlameProvider", return_value=provider):
        yield provider


@pytest.fixture
def graph_file(tmp_path):
    doc = {
        "repo": REPO,
        "commit": "c0ffee",
        "symbols": [{"path": "a.go", "name": "Foo", "exported": True, "start": 0, "end": 100}],
        "references": [
            {"path": "a.go", "start": 10, "end": 13, "target": {"path": "a.go", "name": "Foo"}},
            {
                "path": "a.go",
                "start": 70,
                "end": 73,
                "target": {"repo": LIB, "path": "x.go", "name": "Bar"},
            },
        ],
    }
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(doc))
    return path


def _run_args(tmp_path, graph_file, *extra):
    return [
        "--log-level",
        "ERROR",
        "run",
        "--repo",
        REPO,
        "--repo-path",
        str(tmp_path),
        "--commit",
        "c0ffee",
        "--graph",
        str(graph_file),
        *extra,
    ]


# ── run ──


class TestRunCommand:
    def test_summary(self, tmp_path, graph_file, fake_git):
        result = CliRunner().invoke(main, _run_args(tmp_path, graph_file))
        assert result.exit_code == 0, result.output
        assert f"repo: {REPO} @ c0ffee" in result.output
        assert "symbol_authors: 2" in result.output
        assert "clientships: 1" in result.output
        assert fake_git.calls == [("a.go", "c0ffee")]

    def test_json_output(self, tmp_path, graph_file, fake_git):
        result = CliRunner().invoke(main, _run_args(tmp_path, graph_file, "--json"))
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["repo"] == REPO
        shares = [
            (r["identity"]["email"], r["authorship"]["chars_proportion"])
            for r in data["symbol_authors"]
        ]
        assert shares == [("alice@x.io", 0.6), ("bob@x.io", 0.4)]

    def test_include_self_refs(self, tmp_path, graph_file, fake_git):
        result = CliRunner().invoke(
            main, _run_args(tmp_path, graph_file, "--include-self-refs", "--json")
        )
        assert result.exit_code == 0, result.output
        ships = json.loads(result.output)["clientships"]
        assert sorted(s["symbol_repo"] for s in ships) == [REPO, LIB]

    def test_users_file(self, tmp_path, graph_file, fake_git):
        users = tmp_path / "users.json"
        users.write_text(json.dumps({"bob@x.io": 42}))
        result = CliRunner().invoke(
            main, _run_args(tmp_path, graph_file, "--users", str(users), "--json")
        )
        assert result.exit_code == 0, result.output
        identities = [r["identity"] for r in json.loads(result.output)["repo_authors"]]
        assert identities == [{"email": "alice@x.io"}, {"uid": 42, "email": "bob@x.io"}]

    def test_users_file_must_be_mapping(self, tmp_path, graph_file, fake_git):
        users = tmp_path / "users.json"
        users.write_text(json.dumps(["bob@x.io"]))
        result = CliRunner().invoke(main, _run_args(tmp_path, graph_file, "--users", str(users)))
        assert result.exit_code == 2
        assert "must map email to uid" in result.output

    def test_skipped_files_reported(self, tmp_path, fake_git):
        graph = tmp_path / "graph.json"
        graph.write_text(
            json.dumps(
                {
                    "repo": REPO,
                    "symbols": [
                        {"path": "a.go", "name": "Foo", "start": 0, "end": 100},
                        {"path": "bin.dat", "name": "blob", "start": 0, "end": 4},
                    ],
                }
            )
        )
        result = CliRunner().invoke(main, _run_args(tmp_path, graph))
        assert result.exit_code == 0, result.output
        assert "skipped files: 1" in result.output
        assert "bin.dat: binary content" in result.output

    def test_invalid_graph_fails(self, tmp_path, fake_git):
        graph = tmp_path / "graph.json"
        graph.write_text("{broken")
        result = CliRunner().invoke(main, _run_args(tmp_path, graph))
        assert result.exit_code == 1
        assert "invalid JSON" in result.output

    def test_persists_to_database(self, tmp_path, graph_file, fake_git):
        db_url = f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"
        result = CliRunner().invoke(main, _run_args(tmp_path, graph_file, "--db-url", db_url))
        assert result.exit_code == 0, result.output
        assert "repo_authors: 2" in result.output
        assert (tmp_path / "cli.db").exists()

    def test_rejects_bad_concurrency(self, tmp_path, graph_file, fake_git):
        result = CliRunner().invoke(main, _run_args(tmp_path, graph_file, "--concurrency", "0"))
        assert result.exit_code == 2
        assert "concurrency must be >= 1" in result.output


# ── init-db ──


class TestInitDb:
    def test_creates_tables(self, tmp_path):
        db = tmp_path / "init.db"
        result = CliRunner().invoke(
            main, ["--log-level", "ERROR", "init-db", "--db-url", f"sqlite+aiosqlite:///{db}"]
        )
        assert result.exit_code == 0, result.output
        assert "tables created" in result.output
        assert db.exists()


# ── blame ──


class TestBlameCommand:
    def test_prints_ranges(self, tmp_path, fake_git):
        result = CliRunner().invoke(
            main, ["--log-level", "ERROR", "blame", "--repo-path", str(tmp_path), "a.go"]
        )
        assert result.exit_code == 0, result.output
        assert "a.go @ HEAD: 2 lines, 100 chars" in result.output
        assert "alice@x.io" in result.output
        assert "bob@x.io" in result.output

    def test_unavailable(self, tmp_path, fake_git):
        result = CliRunner().invoke(
            main, ["--log-level", "ERROR", "blame", "--repo-path", str(tmp_path), "bin.dat"]
        )
        assert result.exit_code == 1
        assert "binary content" in result.output
