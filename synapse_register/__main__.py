import sys

from synapse_register.cli import main

sys.exit(main())
