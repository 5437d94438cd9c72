"""Version information for markstats."""

# Semantic versioning: MAJOR.MINOR.PATCH
# MAJOR: Breaking changes to the host page or chart contracts
# MINOR: New features, backward compatible
# PATCH: Bug fixes, backward compatible

__version__ = "0.2.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 0.2.0 - Navbar "Statistics" button with modal (most common tags)
#         - Debounced poll replaces mutation callbacks for button injection
#         - Per-mount generation counter drops stale render completions
# 0.1.0 - Initial release
#         - Mark count by tag / by year charts on the stats page
#         - Idempotent bootstrap keyed by plugin id
