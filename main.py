import sys

from jpeg_sof.cli import main

if __name__ == "__main__":
    sys.exit(main())
