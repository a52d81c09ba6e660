"""Allow running the CLI with `python -m typealgebra`."""

from typealgebra.cli.app import main

if __name__ == "__main__":
    main()
