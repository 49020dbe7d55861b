"""Allow running as: python -m mirrorcheck"""

import sys

from mirrorcheck.mirrorcheck import main

if __name__ == "__main__":
    sys.exit(main())
