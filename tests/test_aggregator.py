"""Tests for the aggregator — repository rollups from per-file partials."""

from __future__ import annotations

import random
from datetime import datetime, timezone

import pytest

from authorship.engines.aggregation.aggregator import (
    aggregate_repository,
    check_complete,
    rollup_authors,
    rollup_clientships,
)
from authorship.engines.aggregation.models import FilePartial, SkippedFile
from authorship.engines.attribution.models import (
    AuthorContribution,
    AuthorshipInfo,
    ClientContribution,
    ReferenceAttribution,
    SymbolAttribution,
)
from authorship.engines.symbols.models import ResolvedSymbol, Span, SymbolKey
from authorship.exceptions import AggregationIncomplete
from authorship.identity import RegisteredAuthor

REPO = "github.com/acme/app"
LIB = "github.com/acme/lib"

D1 = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)
D2 = datetime(2024, 3, 5, 9, 30, tzinfo=timezone.utc)
D3 = datetime(2024, 6, 1, 18, 45, tzinfo=timezone.utc)


def _info(email: str, commit: str = "c1", date: datetime = D1) -> AuthorshipInfo:
    return AuthorshipInfo(author_email=email, last_commit_date=date, last_commit_id=commit)


def _attr(path: str, name: str, exported: bool, *contribs: tuple[str, int, str, datetime]):
    total = sum(c[1] for c in contribs)
    symbol = ResolvedSymbol(
        key=SymbolKey(REPO, path, name), exported=exported, spans=(Span(0, total),)
    )
    authors = tuple(
        AuthorContribution(info=_info(email, cid, date), chars=chars)
        for email, chars, cid, date in sorted(contribs)
    )
    return SymbolAttribution(symbol=symbol, authors=authors)


def _uses(*uses: tuple[SymbolKey, str, int, str, datetime]) -> ReferenceAttribution:
    return ReferenceAttribution(
        refs=[],
        clients={
            (target, f"email:{email}"): ClientContribution(
                info=_info(email, cid, date), use_count=n
            )
            for target, email, n, cid, date in uses
        },
        skipped=[],
    )


FOO = SymbolKey(REPO, "a.go", "Foo")
BAR = SymbolKey(LIB, "x.go", "Bar")


@pytest.fixture
def partials():
    return [
        FilePartial(
            path="a.go",
            symbols=[
                _attr(
                    "a.go", "Foo", True, ("alice@x.io", 60, "c1", D1), ("bob@x.io", 40, "c2", D2)
                ),
                _attr("a.go", "helper", False, ("alice@x.io", 20, "c1", D1)),
            ],
            references=_uses((BAR, "alice@x.io", 1, "c1", D1)),
        ),
        FilePartial(
            path="b.go",
            symbols=[_attr("b.go", "Run", True, ("alice@x.io", 30, "c3", D3))],
            references=_uses(
                (FOO, "carol@x.io", 2, "c4", D2),
                (BAR, "alice@x.io", 3, "c3", D3),
                (BAR, "carol@x.io", 1, "c4", D2),
            ),
        ),
        FilePartial(path="c.go", references=_uses((FOO, "alice@x.io", 1, "c1", D1))),
    ]


# ── completeness barrier ─────────────────────────────────────────────────


class TestCheckComplete:
    def test_all_accounted_for(self, partials):
        skipped = [SkippedFile("d.go", "blame timed out")]
        check_complete(REPO, partials, {"a.go", "b.go", "c.go", "d.go"}, skipped)

    def test_missing_partial(self, partials):
        with pytest.raises(AggregationIncomplete) as exc_info:
            check_complete(REPO, partials, {"a.go", "b.go", "c.go", "d.go"}, [])
        assert exc_info.value.missing == ["missing:d.go"]

    def test_duplicate_partial(self, partials):
        with pytest.raises(AggregationIncomplete, match="duplicate:a.go"):
            check_complete(REPO, partials + [partials[0]], {"a.go", "b.go", "c.go"}, [])

    def test_aggregate_refuses_incomplete(self, partials):
        with pytest.raises(AggregationIncomplete):
            aggregate_repository(REPO, "HEAD", partials[:2], {"a.go", "b.go", "c.go"})


# ── author rollup ────────────────────────────────────────────────────────


class TestRollupAuthors:
    def test_counts_and_proportions(self, partials):
        symbols = [s for p in partials for s in p.symbols]
        authors = {a.author_email: a for a in rollup_authors(symbols)}

        alice = authors["alice@x.io"]
        assert alice.symbol_count == 3
        assert alice.symbols_proportion == 1.0
        assert alice.exported_symbol_count == 2
        assert alice.exported_symbols_proportion == 1.0
        assert alice.info.last_commit_id == "c3"

        bob = authors["bob@x.io"]
        assert bob.symbol_count == 1
        assert bob.symbols_proportion == pytest.approx(1 / 3)
        assert bob.exported_symbol_count == 1
        assert bob.exported_symbols_proportion == 0.5

    def test_counts_bounded_by_totals(self, partials):
        symbols = [s for p in partials for s in p.symbols]
        exported = sum(1 for s in symbols if s.exported)
        for a in rollup_authors(symbols):
            assert 0 <= a.exported_symbol_count <= a.symbol_count <= len(symbols)
            assert a.exported_symbol_count <= exported
            assert 0.0 <= a.symbols_proportion <= 1.0
            assert 0.0 <= a.exported_symbols_proportion <= 1.0

    def test_no_exported_symbols(self):
        symbols = [_attr("a.go", "f", False, ("a@x.io", 10, "c1", D1))]
        (a,) = rollup_authors(symbols)
        assert a.exported_symbol_count == 0
        assert a.exported_symbols_proportion == 0.0
        assert a.symbols_proportion == 1.0

    def test_zero_char_contribution_not_counted(self):
        sym = _attr("a.go", "f", True, ("a@x.io", 10, "c1", D1), ("b@x.io", 0, "c2", D2))
        assert [a.author_email for a in rollup_authors([sym])] == ["a@x.io"]

    def test_one_author_under_two_emails(self):
        def _symbol(name: str, email: str, commit: str, date: datetime) -> SymbolAttribution:
            info = AuthorshipInfo(email, date, commit, RegisteredAuthor(uid=7, email=email))
            return SymbolAttribution(
                symbol=ResolvedSymbol(
                    key=SymbolKey(REPO, "a.go", name), exported=True, spans=(Span(0, 10),)
                ),
                authors=(AuthorContribution(info=info, chars=10),),
            )

        symbols = [
            _symbol("f", "alice@home.io", "c1", D1),
            _symbol("g", "alice@work.io", "c2", D2),
        ]
        (alice,) = rollup_authors(symbols)
        assert alice.author_key == "uid:7"
        assert alice.symbol_count == 2
        assert alice.symbols_proportion == 1.0
        assert alice.info.last_commit_id == "c2"
        assert alice.author_email == "alice@work.io"

    def test_empty(self):
        assert rollup_authors([]) == []


# ── clientship rollup ────────────────────────────────────────────────────


class TestRollupClientships:
    @pytest.fixture
    def clients(self):
        return {
            (FOO, "email:carol@x.io"): ClientContribution(_info("carol@x.io", "c4", D2), 2),
            (BAR, "email:carol@x.io"): ClientContribution(_info("carol@x.io", "c5", D3), 1),
            (BAR, "email:alice@x.io"): ClientContribution(_info("alice@x.io", "c3", D3), 4),
        }

    def test_self_references_excluded_by_default(self, clients):
        ships = rollup_clientships(REPO, clients)
        assert [(c.author_email, c.symbol_repo, c.ref_count) for c in ships] == [
            ("alice@x.io", LIB, 4),
            ("carol@x.io", LIB, 1),
        ]

    def test_self_references_included_when_enabled(self, clients):
        ships = rollup_clientships(REPO, clients, include_self_references=True)
        assert [(c.author_email, c.symbol_repo, c.ref_count) for c in ships] == [
            ("alice@x.io", LIB, 4),
            ("carol@x.io", REPO, 2),
            ("carol@x.io", LIB, 1),
        ]

    def test_groups_by_symbol_repo(self):
        baz = SymbolKey(LIB, "y.go", "Baz")
        clients = {
            (BAR, "email:a@x.io"): ClientContribution(_info("a@x.io", "c1", D1), 2),
            (baz, "email:a@x.io"): ClientContribution(_info("a@x.io", "c2", D2), 3),
        }
        (ship,) = rollup_clientships(REPO, clients)
        assert ship.ref_count == 5
        assert ship.info.last_commit_id == "c2"
        assert ship.source_repo == REPO


# ── full aggregation ─────────────────────────────────────────────────────


class TestAggregateRepository:
    def test_totals(self, partials):
        agg = aggregate_repository(REPO, "HEAD", partials, {"a.go", "b.go", "c.go"})
        assert agg.total_symbols == 3
        assert agg.total_exported_symbols == 2
        assert [str(s.key) for s in agg.symbols] == [
            f"{REPO}:a.go:Foo",
            f"{REPO}:a.go:helper",
            f"{REPO}:b.go:Run",
        ]

    def test_symbol_clients_merged_across_files(self, partials):
        agg = aggregate_repository(REPO, "HEAD", partials, {"a.go", "b.go", "c.go"})
        by_key = {(c.symbol, c.author_email): c.contribution for c in agg.symbol_clients}
        assert by_key[(BAR, "alice@x.io")].use_count == 4
        assert by_key[(BAR, "alice@x.io")].info.last_commit_id == "c3"
        # Self references are still symbol clients.
        assert by_key[(FOO, "carol@x.io")].use_count == 2
        assert by_key[(FOO, "alice@x.io")].use_count == 1

    def test_clientships(self, partials):
        agg = aggregate_repository(REPO, "HEAD", partials, {"a.go", "b.go", "c.go"})
        assert [(c.author_email, c.symbol_repo, c.ref_count) for c in agg.clientships] == [
            ("alice@x.io", LIB, 4),
            ("carol@x.io", LIB, 1),
        ]

    def test_order_independent(self, partials):
        expected = aggregate_repository(REPO, "HEAD", partials, {"a.go", "b.go", "c.go"})
        rng = random.Random(7)
        for _ in range(10):
            shuffled = partials[:]
            rng.shuffle(shuffled)
            agg = aggregate_repository(REPO, "HEAD", shuffled, {"c.go", "a.go", "b.go"})
            assert agg == expected

    def test_skipped_files_contribute_nothing(self, partials):
        skipped = [SkippedFile("z.go", "blame timed out"), SkippedFile("d.go", "binary content")]
        agg = aggregate_repository(
            REPO, "HEAD", partials, {"a.go", "b.go", "c.go", "d.go", "z.go"}, skipped
        )
        assert agg.total_symbols == 3
        assert [s.path for s in agg.skipped_files] == ["d.go", "z.go"]

    def test_inconsistent_symbols_listed(self, partials):
        flagged = SymbolAttribution(
            symbol=partials[0].symbols[0].symbol,
            authors=partials[0].symbols[0].authors,
            inconsistent=True,
        )
        partials[0].symbols[0] = flagged
        agg = aggregate_repository(REPO, "HEAD", partials, {"a.go", "b.go", "c.go"})
        assert agg.inconsistent_symbols == [FOO]

    def test_empty_repository(self):
        agg = aggregate_repository(REPO, "HEAD", [], set())
        assert agg.total_symbols == 0
        assert agg.authors == []
        assert agg.clientships == []
