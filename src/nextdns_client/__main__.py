"""Allow running as ``python -m nextdns_client``."""

from .cli import main

if __name__ == "__main__":
    main()
