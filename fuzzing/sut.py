"""Target for py-afl-fuzz:

    py-afl-fuzz -i seeds -o results -- python sut.py
"""

import os
import sys

import afl

from fuzztools import SEEDS, run_all


def main():
    # warm up outside the persistent loop so imports aren't measured
    for seed in SEEDS:
        run_all(seed)

    stdin = sys.stdin.buffer
    while afl.loop(10000):
        stdin.seek(0)
        run_all(stdin.read())


if __name__ == "__main__":
    main()
    # AFL only looks at the exit status, skip interpreter teardown
    os._exit(0)
