import sys

from chainpulse.cli import main

sys.exit(main())
