import sys

from fastdb.cli import main

sys.exit(main())
