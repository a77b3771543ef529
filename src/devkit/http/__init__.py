"""HTTP helpers (starlette)."""
