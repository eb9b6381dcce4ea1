import sys

from changeset_ai.cli.main import main

sys.exit(main())
