import sys

from streamput.presentation.cli import main

sys.exit(main())
