import sys

from weathercast.cli import main

sys.exit(main())
