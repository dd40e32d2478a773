"""Allow running spmgraph with ``python -m spmgraph``."""

from .cli import main

if __name__ == "__main__":
    main()
