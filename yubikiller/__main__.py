import sys

from yubikiller.cli import main

sys.exit(main())
