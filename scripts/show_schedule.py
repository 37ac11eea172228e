"""Print today's (or another day's) Zermelo schedule.

Standalone launcher for running from a checkout without installing the
package. Loads .env, then hands the arguments to the zermelo-cli entry point.

Run with: python scripts/show_schedule.py --config ~/.zermelo.toml
Tomorrow: python scripts/show_schedule.py --config ~/.zermelo.toml --tomorrow

Exit codes:
  0 = success (schedule on stdout)
  1 = error (message on stderr)
"""

import os
import sys

from dotenv import load_dotenv

load_dotenv()

# Add project root to path for src imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.zermelo_cli.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
