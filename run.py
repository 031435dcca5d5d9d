"""
CloudSpace - Quick Start Script
Run this to start the development server
"""

import uvicorn
from cloudspace.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    print("=" * 60)
    print("Starting CloudSpace API Server")
    print("=" * 60)
    print(f"Environment: {settings.ENVIRONMENT}")
    print(f"Server: http://{settings.HOST}:{settings.PORT}")
    print(f"API: http://{settings.HOST}:{settings.PORT}{settings.API_PREFIX}")
    print(f"Storage backend: {settings.STORAGE_BACKEND}")
    print("=" * 60)
    print("\nMake sure you have:")
    print("  - the database in DATABASE_URL reachable")
    print("  - .env file configured")
    print("  - OPENAI_API_KEY set if texts should get generated names")
    print("\nPress CTRL+C to stop\n")

    uvicorn.run(
        "cloudspace.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
