from __future__ import annotations

from xivoice.cli import main

if __name__ == "__main__":
    main()
