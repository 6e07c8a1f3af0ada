"""Terminal digital rain.

Run with: `python -m digirain`

Press Ctrl-C to stop; the cursor is restored and the screen cleared on the way
out.
"""

from __future__ import annotations

import sys

from .app import main


if __name__ == "__main__":
    sys.exit(main())
