"""Version information."""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)

# Version history
CHANGELOG = """
# Changelog

## v1.0.0

**Change-set dependency graph**

- Changed files listed in dependency order
- Graph contracted to changed files, reachability preserved through
  unchanged files
- Rendered with Graphviz (svg/png/pdf)
- In-process (networkx) or external (tsort) ordering
- uv and npm workspace root discovery

### Known Limitations

- Only Python imports are analysed by the built-in scanner
- Any import cycle in the analysed package aborts the run
"""
