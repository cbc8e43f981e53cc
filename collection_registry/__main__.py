"""Allow ``python -m collection_registry``."""

import sys

from collection_registry.cli import main

sys.exit(main())
