import sys

from gvasm.router import main

if __name__ == '__main__':
    sys.exit(main())
