"""
markstats - mark-count statistics for a GraphQL media catalog.

Layers (imports only flow downward):
- helpers/    = stdlib-only utilities and DTOs
- components/ = domain building blocks (normalization, aggregation, charts, host page)
- workflows/  = orchestration of components
- services/   = long-lived state (config, acquisition, mount coordinator, button watcher)
- interfaces/ = CLI presentation
"""

from markstats.__version__ import __version__

__all__ = ["__version__"]
