import sys

from gridnode.cli.main import main

sys.exit(main())
