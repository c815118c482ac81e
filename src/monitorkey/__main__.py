"""Allow ``python -m monitorkey``."""

from monitorkey.app import main

if __name__ == "__main__":
    main()
