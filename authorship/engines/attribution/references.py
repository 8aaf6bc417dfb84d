"""Reference attributor — attribute each use of a symbol to the author of the use site."""

from __future__ import annotations

import structlog

from authorship.engines.attribution.models import (
    AuthorshipInfo,
    ClientContribution,
    ClientKey,
    RefAttribution,
    ReferenceAttribution,
)
from authorship.engines.blame.models import FileBlame
from authorship.engines.symbols.models import RefEdge
from authorship.identity import IdentityResolver

log = structlog.get_logger("authorship.engine")


def attribute_references(
    edges: list[RefEdge],
    blame: FileBlame,
    resolver: IdentityResolver | None = None,
) -> ReferenceAttribution:
    """Attribute every edge in one referencing file.

    The user of a reference is whoever owns the blame line at the edge's
    start offset, regardless of who wrote the target symbol. Uses are
    counted per resolved author, not per blame email. Each occurrence
    counts once, even when several come from the same commit.
    """
    refs: list[RefAttribution] = []
    clients: dict[ClientKey, ClientContribution] = {}
    skipped: list[RefEdge] = []

    for edge in sorted(edges):
        in_file = 0 <= edge.start < blame.length and edge.start <= edge.end <= blame.length
        if not in_file:
            log.warning(
                "references.inconsistent",
                path=edge.path,
                start=edge.start,
                end=edge.end,
                target=str(edge.target),
                file_length=blame.length,
            )
            skipped.append(edge)
            continue

        info = AuthorshipInfo.from_entry(blame.entry_at(edge.start), resolver)
        refs.append(RefAttribution(edge=edge, info=info))

        use = ClientContribution(info=info, use_count=1)
        key = (edge.target, info.author_key)
        prev = clients.get(key)
        clients[key] = use if prev is None else prev.merge(use)

    return ReferenceAttribution(refs=refs, clients=clients, skipped=skipped)
