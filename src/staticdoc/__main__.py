"""Allow running staticdoc as ``python -m staticdoc``."""

from staticdoc.cli import main

if __name__ == "__main__":
    main()
