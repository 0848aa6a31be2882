import sys

from tinycrm.cli import main

sys.exit(main())
