import sys

from cscan.cli import main

sys.exit(main())
