"""Module entrypoint for ``python -m dockpanel``."""

from .cli import main


if __name__ == "__main__":
    main()
