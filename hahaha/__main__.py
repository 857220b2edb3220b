import sys

from hahaha.main import main

sys.exit(main())
