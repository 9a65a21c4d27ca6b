#!/usr/bin/env python
"""
Backend runner for the todo app.

Usage:
    python -m backend.run_backend
"""
import uvicorn

from backend.core.config import settings


def main() -> None:
    print(f"\n[INFO] Starting backend server on port {settings.PORT}...")
    uvicorn.run("backend.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    main()
