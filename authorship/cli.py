"""CLI entry point for standalone usage: authorship.

Subcommands:
    authorship run --repo URI --repo-path DIR --commit SHA --graph graph.json
    authorship init-db --db-url URL
    authorship blame --repo-path DIR --commit SHA path/to/file
"""

from __future__ import annotations

import asyncio
import dataclasses
import json
import sys
from pathlib import Path

import click

from authorship.core.config import EngineSettings
from authorship.core.database import create_all, create_engine, make_session_factory
from authorship.core.logging import setup_logging
from authorship.engines.blame.provider import GitBlameProvider
from authorship.engines.emitter.records import RepositoryRecords
from authorship.engines.pipeline.runner import AuthorshipRunner, RunResult
from authorship.engines.symbols.graph import JsonGraphProvider
from authorship.exceptions import AuthorshipError, BlameUnavailable
from authorship.identity import EmailIdentityResolver, IdentityResolver, StaticIdentityResolver


def _load_resolver(users_file: str | None) -> IdentityResolver:
    """Build an identity resolver from a JSON ``{"email": uid}`` file."""
    if not users_file:
        return EmailIdentityResolver()
    data = json.loads(Path(users_file).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise click.BadParameter("users file must map email to uid", param_hint="--users")
    try:
        return StaticIdentityResolver({str(k): int(v) for k, v in data.items()})
    except (TypeError, ValueError) as exc:
        raise click.BadParameter(
            f"invalid uid in users file: {exc}", param_hint="--users"
        ) from exc


def _print_summary(records: RepositoryRecords, skipped: list) -> None:
    click.echo(f"repo: {records.repo} @ {records.commit}")
    for table, n in records.counts().items():
        click.echo(f"  {table}: {n}")
    if skipped:
        click.echo(f"  skipped files: {len(skipped)}")
        for s in skipped:
            click.echo(f"    {s.path}: {s.reason}")
    flagged = sorted({str(r.symbol) for r in records.symbol_authors if r.inconsistent})
    if flagged:
        click.echo(f"  inconsistent symbols: {len(flagged)}")
        for key in flagged:
            click.echo(f"    {key}")


@click.group()
@click.option("--log-level", default=None, help="Default: $AUTHORSHIP_LOG_LEVEL or INFO")
@click.option("--log-format", type=click.Choice(["console", "json"]), default=None)
def main(log_level: str | None, log_format: str | None) -> None:
    """Symbol and repository authorship from blame + symbol graphs."""
    try:
        setup_logging(log_level, log_format)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--log-level") from exc


@main.command()
@click.option("--repo", "repo", required=True, help="Repository URI, e.g. github.com/org/repo")
@click.option(
    "--repo-path",
    required=True,
    type=click.Path(exists=True, file_okay=False),
    help="Local checkout used for git blame",
)
@click.option("--commit", required=True, help="Commit to analyse (blame ceiling)")
@click.option(
    "--graph",
    "graph_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Symbol/reference graph JSON",
)
@click.option("--db-url", default=None, help="Persist records to this database (async URL)")
@click.option("--users", "users_file", default=None, type=click.Path(exists=True, dir_okay=False))
@click.option("--include-self-refs/--exclude-self-refs", default=None)
@click.option("--concurrency", type=int, default=None)
@click.option("--blame-timeout", type=float, default=None, help="Seconds per file")
@click.option("--json", "as_json", is_flag=True, help="Print emitted records as JSON")
def run(
    repo: str,
    repo_path: str,
    commit: str,
    graph_file: str,
    db_url: str | None,
    users_file: str | None,
    include_self_refs: bool | None,
    concurrency: int | None,
    blame_timeout: float | None,
    as_json: bool,
) -> None:
    """Attribute symbols and references of one repository commit."""
    overrides = {
        "include_self_references": include_self_refs,
        "concurrency": concurrency,
        "blame_timeout": blame_timeout,
    }
    try:
        settings = dataclasses.replace(
            EngineSettings.from_env(), **{k: v for k, v in overrides.items() if v is not None}
        )
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc
    runner = AuthorshipRunner(
        blame_provider=GitBlameProvider(repo_path),
        graph_provider=JsonGraphProvider(graph_file),
        settings=settings,
        identity_resolver=_load_resolver(users_file),
    )

    async def _run() -> RunResult:
        if db_url is None:
            return await runner.collect(repo, commit)
        engine = create_engine(db_url)
        try:
            await create_all(engine)
            return await runner.run(make_session_factory(engine), repo, commit)
        finally:
            await engine.dispose()

    try:
        result = asyncio.run(_run())
    except AuthorshipError as exc:
        raise click.ClickException(str(exc)) from exc
    if result.status != "completed" or result.records is None:
        raise click.ClickException(result.error or "run failed")
    records, skipped = result.records, result.skipped_files

    if as_json:
        click.echo(json.dumps(dataclasses.asdict(records), indent=2, default=str))
    else:
        _print_summary(records, skipped)


@main.command("init-db")
@click.option("--db-url", default=None, help="Default: $AUTHORSHIP_DATABASE_URL")
def init_db(db_url: str | None) -> None:
    """Create the authorship tables."""
    url = db_url or EngineSettings.from_env().database_url

    async def _init():
        engine = create_engine(url)
        try:
            await create_all(engine)
        finally:
            await engine.dispose()

    asyncio.run(_init())
    click.echo("tables created")


@main.command()
@click.option("--repo-path", required=True, type=click.Path(exists=True, file_okay=False))
@click.option("--commit", default="HEAD")
@click.argument("path")
def blame(repo_path: str, commit: str, path: str) -> None:
    """Print normalized blame ranges for PATH."""
    try:
        fb = asyncio.run(GitBlameProvider(repo_path).blame(path, commit))
    except BlameUnavailable as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    click.echo(f"{fb.path} @ {fb.commit}: {fb.line_count} lines, {fb.length} chars")
    for e in fb.entries:
        click.echo(
            f"  {e.start_line:>5}-{e.end_line:<5} {e.commit_id[:12]} "
            f"{e.commit_date.isoformat()} {e.author_email}"
        )
