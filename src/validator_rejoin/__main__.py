import sys

from validator_rejoin.cli import main

sys.exit(main())
