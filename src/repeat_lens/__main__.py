"""Allow ``python -m repeat_lens`` as an alias for the ``rl`` command."""

from .cli import main

if __name__ == "__main__":
    main()
