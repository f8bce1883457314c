import sys

from procprobe.cli.cli import main

sys.exit(main())
