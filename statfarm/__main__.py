"""Allow ``python -m statfarm``."""
from .cli import main

if __name__ == "__main__":
    main()
