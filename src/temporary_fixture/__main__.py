"""Entry point for the temporary_fixture package."""

import sys
from temporary_fixture.cli import main

if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        sys.exit(130)
