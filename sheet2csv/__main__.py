import sys

from sheet2csv.cli import main

sys.exit(main())
