"""Allow ``python -m inventory_manager``."""

import sys

from inventory_manager.ui.app import main

sys.exit(main())
