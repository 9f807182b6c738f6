import sys

from rill.repl import main

sys.exit(main())
