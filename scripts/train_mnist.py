#!/usr/bin/env python3
"""
Training UESMANN on MNIST
=========================
Trains a network on MNIST-format IDX files and reports accuracy on a test
set, taking the largest output as the predicted label. All examples are
at h=0, so the modulated types behave as their unmodulated base.

Usage:
    python scripts/train_mnist.py --data ./data --iterations 200000 --save mnist.net
"""

import argparse
from pathlib import Path

import numpy as np

from uesmann import (
    NetFactory, NetType, SGDParams, SGDTrainer, ExampleSet, MNIST, setup_logging
)


def accuracy(net, examples: ExampleSet) -> float:
    """Percentage of examples whose largest output is the labelled one."""
    correct = 0
    for i in range(examples.count):
        out = net.run(examples.get_inputs(i))
        if np.argmax(out) == np.argmax(examples.get_outputs(i)):
            correct += 1
    return 100.0 * correct / examples.count


def main():
    parser = argparse.ArgumentParser(description="UESMANN MNIST training")
    parser.add_argument("--data", default="./data", help="Directory holding the four IDX files")
    parser.add_argument("--type", default="plain", help="Network type: plain, ob, hin or ues")
    parser.add_argument("--hidden", type=int, default=16, help="Hidden nodes")
    parser.add_argument("--eta", type=float, default=0.1, help="Learning rate")
    parser.add_argument("--iterations", type=int, default=200000, help="Training iterations")
    parser.add_argument("--train-count", type=int, default=0, help="Training images to load (0: all)")
    parser.add_argument("--cv-prop", type=float, default=0.0, help="Proportion held out for cross-validation")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--save", type=str, default=None, help="Save the trained network to this file")
    parser.add_argument("--verbose", action="store_true", help="Print cross-validation progress")
    args = parser.parse_args()

    setup_logging(level="INFO")
    data = Path(args.data)

    print("=" * 70)
    print("UESMANN Training on MNIST")
    print("=" * 70)

    train = ExampleSet.from_mnist(MNIST(
        data / "train-labels-idx1-ubyte", data / "train-images-idx3-ubyte", length=args.train_count
    ))
    test = ExampleSet.from_mnist(MNIST(
        data / "t10k-labels-idx1-ubyte", data / "t10k-images-idx3-ubyte"
    ))
    print(f"  - Train: {train.count} samples")
    print(f"  - Test: {test.count} samples")

    net = NetFactory.make_net_for(NetType.from_name(args.type), train, args.hidden)
    print(f"\n✓ {net.net_type.name} network created: {net.get_data_size():,} parameters")

    params = SGDParams(eta=args.eta, iterations=args.iterations).set_seed(args.seed)
    if args.cv_prop > 0:
        params.cross_validation(train, args.cv_prop, 100, 10).set_store_best().set_select_best_with_cv()

    trainer = SGDTrainer(net, params, verbose=args.verbose)
    mse = trainer.train(train)

    print(f"\n📊 Final evaluation...")
    print(f"  Training MSE: {mse:.6f}")
    print(f"  Test MSE: {net.test(test):.6f}")
    print(f"  Accuracy: {accuracy(net, test):.2f}%")

    if args.save:
        NetFactory.save(args.save, net)
        print(f"\n💾 Network saved: {args.save}")

    print("=" * 70)
    print("✅ Training completed!")
    print("=" * 70)


if __name__ == "__main__":
    main()
