import sys

from notevars.cli.main import main

sys.exit(main())
