import sys

from camprompt.main import main

sys.exit(main())
