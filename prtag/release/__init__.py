"""Release decision context.

Pure decision core (no I/O):
- semver, version_range: version parsing, ordering, bumping, formatting
- labels: the single authoritative increment label
- tags: latest version tag inside a range
- guard: event eligibility
- pipeline: orchestration over the collaborators declared in ports

Adapters with side effects live next to it (event, gh) and are only wired
in by the CLI.
"""

from __future__ import annotations
