"""HTTP surface of Flagbook (FastAPI)."""
