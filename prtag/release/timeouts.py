from __future__ import annotations

# gh api calls (list refs, create ref, create release)
GH_TIMEOUT_SECONDS = 60.0

# Idempotent gh read retry policy; writes are never retried.
GH_READ_RETRY_ATTEMPTS = 3
GH_READ_RETRY_DELAY_SECONDS = 1.0
