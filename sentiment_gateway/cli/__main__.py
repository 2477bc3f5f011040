"""Allow ``python -m sentiment_gateway.cli`` execution."""

import sys

from sentiment_gateway.cli.serve import main

sys.exit(main())
