"""Allow running as `python -m artie_lens`."""

from .cli import main

if __name__ == "__main__":
    main()
