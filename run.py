#!/usr/bin/env python3
"""
Local development server
Loads .env before the settings are imported, then starts uvicorn with reload
"""

import os

from dotenv import load_dotenv

load_dotenv()

import uvicorn  # noqa: E402


if __name__ == "__main__":
    port = int(os.getenv("PORT", 8000))
    print(f"Starting Ganu CMS API on http://127.0.0.1:{port}")
    print(f"Docs: http://127.0.0.1:{port}/docs")
    uvicorn.run("app.main:app", host="127.0.0.1", port=port, reload=True)
