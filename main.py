from __future__ import annotations

from dryroom_plot.cli import main


if __name__ == "__main__":
    main()
