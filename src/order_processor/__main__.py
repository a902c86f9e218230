import sys

from order_processor.cli import main

sys.exit(main())
