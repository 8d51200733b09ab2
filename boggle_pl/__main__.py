import sys

from boggle_pl.cli import main

sys.exit(main())
