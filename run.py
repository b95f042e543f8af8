#!/usr/bin/env python3
"""
Development server runner
"""

import uvicorn

from schoolboard.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "schoolboard.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENVIRONMENT == "development",
        log_level="info",
        access_log=True,
    )
