"""Entry point for ``python -m forwardgen``."""

from forwardgen.cli import main

if __name__ == "__main__":
    main()
