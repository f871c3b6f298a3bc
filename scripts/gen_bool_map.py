#!/usr/bin/env python3
"""
Boolean Pairing Map - UESMANN
=============================
For every pairing of the sixteen two-input boolean functions, train a
number of networks to perform the first at h=0 and the second at h=1, and
print the proportion which succeed as CSV (a,b,correct).

Each network is trained with STRIDE shuffling, so every epoch alternates
between h=0 and h=1 examples, and keeps the best network by training error.
"""

import argparse
import multiprocessing as mp
import sys

from uesmann import (
    NetFactory, NetType, SGDParams, ShuffleMode, FUNCTION_NAMES,
    make_pairing_set, boolean_success, setup_logging
)


def run_attempt(args: tuple) -> bool:
    """Train one network on one pairing; True if it performs both functions."""
    f0, f1, seed, net_type, hidden, eta, epochs = args
    examples = make_pairing_set(f0, f1)
    params = (SGDParams.for_epochs(eta, examples, epochs)
              .set_store_best()
              .set_shuffle(ShuffleMode.STRIDE)
              .set_seed(seed))
    net = NetFactory.make_net_for(net_type, examples, hidden)
    net.train_sgd(examples, params)
    return boolean_success(net, f0, f1)


def main():
    parser = argparse.ArgumentParser(description="UESMANN boolean pairing map")
    parser.add_argument("--type", default="ues", help="Network type: plain, ob, hin or ues")
    parser.add_argument("--attempts", type=int, default=1000, help="Networks per pairing")
    parser.add_argument("--epochs", type=int, default=75000, help="Epochs of 8 examples per network")
    parser.add_argument("--eta", type=float, default=0.1, help="Learning rate")
    parser.add_argument("--hidden", type=int, default=2, help="Hidden nodes")
    parser.add_argument("--workers", type=int, default=0, help="Worker processes (0: one per CPU)")
    parser.add_argument("--names", action="store_true", help="Print function names, not numbers")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    args = parser.parse_args()

    setup_logging(level=args.log_level)
    net_type = NetType.from_name(args.type)
    workers = args.workers or mp.cpu_count()

    print("a,b,correct")
    with mp.Pool(workers) as pool:
        for f0 in range(16):
            for f1 in range(16):
                jobs = [(f0, f1, seed, net_type, args.hidden, args.eta, args.epochs)
                        for seed in range(args.attempts)]
                successes = sum(pool.map(run_attempt, jobs))
                a, b = (FUNCTION_NAMES[f0], FUNCTION_NAMES[f1]) if args.names else (f0, f1)
                print(f"{a},{b},{successes / args.attempts:f}")
                sys.stdout.flush()


if __name__ == "__main__":
    main()
