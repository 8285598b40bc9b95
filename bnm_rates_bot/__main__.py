"""Allow ``python -m bnm_rates_bot``."""

import sys

from bnm_rates_bot.bot.runner import main

sys.exit(main())
