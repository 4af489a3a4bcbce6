#!/usr/bin/env python3
"""
Thread View Server
Serves the linear thread view API
"""
import logging
import uvicorn
import sys
from config import DEFAULT_HOST, DEFAULT_PORT, LOG_LEVEL, LOG_FORMAT

def main():
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    print("Starting thread view server...")
    print("Available at:")
    print(f"  - http://{DEFAULT_HOST}:{DEFAULT_PORT}")
    print(f"  - API endpoints: http://{DEFAULT_HOST}:{DEFAULT_PORT}/api/pages/*")
    print()
    print("Press Ctrl+C to stop the server")

    try:
        from app import app

        uvicorn.run(
            app,
            host=DEFAULT_HOST,
            port=DEFAULT_PORT,
            reload=False,
            access_log=True,
            log_level=LOG_LEVEL.lower()
        )
    except KeyboardInterrupt:
        print("\nServer stopped by user")
    except Exception as e:
        print(f"Error starting server: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
