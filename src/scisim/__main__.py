import sys

from scisim.cli import main

sys.exit(main())
