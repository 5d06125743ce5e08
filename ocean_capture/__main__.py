import sys

from ocean_capture.cli import main

sys.exit(main())
