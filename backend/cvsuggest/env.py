# backend/cvsuggest/env.py
from __future__ import annotations

from pathlib import Path
from os import environ as env
from dotenv import load_dotenv, find_dotenv

# Try CWD→parents; if that fails, try repo-root/.env (…/backend/../.env)
dotenv_path = find_dotenv(usecwd=True)
if not dotenv_path:
    repo_root = Path(__file__).resolve().parents[1].parent  # backend/ -> repo root
    candidate = repo_root / ".env"
    dotenv_path = str(candidate) if candidate.exists() else ""

# Load only once; do NOT override real environment
load_dotenv(dotenv_path or None, override=False)


def key_status(val: str | None) -> str:
    """Loggable stand-in for a secret: never the value itself."""
    return "configured" if val else "missing"


__all__ = ["env", "dotenv_path", "key_status"]
