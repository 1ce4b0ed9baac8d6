"""Run minup as C{python -m minup}."""
import sys

from minup.driver import main

sys.exit(main(sys.argv[1:]))
