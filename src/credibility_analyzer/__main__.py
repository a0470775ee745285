"""Allow ``python -m credibility_analyzer``."""

import sys

from credibility_analyzer.cli import main

if __name__ == "__main__":
    sys.exit(main())
