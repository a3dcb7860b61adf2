"""Team analytics aggregation package."""

__all__ = [
    "config",
    "errors",
    "records",
    "stats",
    "performance",
    "advanced",
    "synergy",
    "players",
    "convex_client",
    "ingest",
    "seed",
    "report",
    "render",
    "report_pdf",
    "cli",
]
