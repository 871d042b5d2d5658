from __future__ import annotations

from pydantic import BaseModel


class TraceConfig(BaseModel):
    enabled: bool = False
    """Initial state of the gate.  A disabled trace records nothing."""
    sort_buckets: bool = False
    """Emit buckets in lexicographic order instead of creation order."""
    idempotent_begin: bool = False
    """Skip the extra ``"Begin"`` mark when a bucket is begun a second time."""
