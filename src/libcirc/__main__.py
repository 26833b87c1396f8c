"""Allow ``python -m libcirc``."""

from libcirc.cli import main

if __name__ == "__main__":
    main()
