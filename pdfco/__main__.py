"""Allow running as: python -m pdfco"""

import sys

from .cli import main

sys.exit(main())
