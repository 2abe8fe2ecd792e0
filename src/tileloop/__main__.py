"""Run the tileloop command line: `python -m tileloop`."""

import sys

from tileloop import main

sys.exit(main())
