"""
Service entry point

Usage:
    python -m bank_ledger
"""

import uvicorn

from bank_ledger.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "bank_ledger.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
    )
