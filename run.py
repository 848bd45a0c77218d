#!/usr/bin/env python3
"""
Account Ledger Entry Point

Starts the FastAPI server with the in-memory account ledger.
"""

import sys

from account_ledger.api import run_server
from account_ledger.config import get_config


if __name__ == "__main__":
    config = get_config()
    print("Starting Account Ledger...")
    print("All amounts use Decimal precision; state is kept in memory only")
    print(f"API available at: http://localhost:{config.api_port}{config.api_prefix}")
    if config.enable_docs:
        print(f"Documentation at: http://localhost:{config.api_port}/docs")
    print()

    try:
        run_server(
            host=config.api_host,
            port=config.api_port,
            debug=False
        )
    except KeyboardInterrupt:
        print("\nShutting down Account Ledger...")
    except Exception as e:
        print(f"Error starting server: {e}")
        sys.exit(1)
