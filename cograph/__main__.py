import sys

from cograph.pipeline import main

sys.exit(main())
