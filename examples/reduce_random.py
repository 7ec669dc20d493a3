#!/usr/bin/env python3
"""
Build a random integer matrix of prescribed rank (a product of a random
R x K and K x C matrix), reduce it, and report the pivot structure.
"""

import argparse
import random

from rreftools import Reducer, is_reduced_row_echelon


def random_matrix_of_rank(rows, cols, k, rng, lo=-5, hi=5):
    A = [[rng.randint(lo, hi) for _ in range(k)] for _ in range(rows)]
    B = [[rng.randint(lo, hi) for _ in range(cols)] for _ in range(k)]
    return [[sum(A[i][t] * B[t][j] for t in range(k)) for j in range(cols)]
            for i in range(rows)]


def main():
    ap = argparse.ArgumentParser(description=__doc__,
                                 formatter_class=argparse.RawDescriptionHelpFormatter)
    ap.add_argument("--rows", type=int, default=5)
    ap.add_argument("--cols", type=int, default=6)
    ap.add_argument("--rank", type=int, default=3)
    ap.add_argument("--seed", type=int, default=7)
    ap.add_argument("--trials", type=int, default=1)
    args = ap.parse_args()

    rng = random.Random(args.seed)
    for t in range(args.trials):
        M = random_matrix_of_rank(args.rows, args.cols, args.rank, rng)
        red = Reducer(M)
        R = red.to_list()
        ok = is_reduced_row_echelon(R, 1e-6)
        print(f"trial {t}: rank={red.rank} (target<={args.rank})  "
              f"pivots={red.pivot_columns()}  passes={red.passes}  rref_ok={ok}")
        if args.trials == 1:
            print(red)


if __name__ == "__main__":
    main()
