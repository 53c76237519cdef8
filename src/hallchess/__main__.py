import sys

from hallchess.app import main

sys.exit(main())
