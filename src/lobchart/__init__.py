# SPDX-License-Identifier: MIT

from lobchart.cleanup import register_cleanup
from lobchart.initialize import initialize
from lobchart.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
