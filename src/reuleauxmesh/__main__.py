import sys

from reuleauxmesh.cli import main

if __name__ == "__main__":
    sys.exit(main())
