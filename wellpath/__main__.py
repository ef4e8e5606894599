import sys

from wellpath.cli import main

sys.exit(main())
