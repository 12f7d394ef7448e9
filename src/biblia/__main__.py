"""Entry point for running Biblia as a module.

This allows running: python -m biblia
"""

from .cli import main

if __name__ == "__main__":
    main()
