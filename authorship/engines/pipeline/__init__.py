"""Pipeline — wires blame, attribution, aggregation and the sink together."""

from authorship.engines.pipeline.runner import AuthorshipRunner, RunResult

__all__ = ["AuthorshipRunner", "RunResult"]
