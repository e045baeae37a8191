#!/usr/bin/env python3
"""
Utility script to visualize saved evodnn networks.

Usage:
    python scripts/visualize_network.py --network saved_network.pkl
"""

import argparse
import sys

from evodnn.phenotype import load, visualize


def main():
    parser = argparse.ArgumentParser(description='Visualize evodnn neural networks')
    parser.add_argument('--network', type=str, required=True,
                        help='Path to a network saved with evodnn.save')
    parser.add_argument('--output', type=str, default='network',
                        help='Output filename (without extension)')
    parser.add_argument('--format', type=str, default='png',
                        choices=['png', 'pdf', 'svg'],
                        help='Output format')
    parser.add_argument('--no-view', action='store_true',
                        help='Do not automatically open the generated file')

    args = parser.parse_args()

    try:
        network = load(args.network)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    dot = visualize(network, view=False)
    dot.format = args.format
    dot.render(args.output, view=not args.no_view, cleanup=True)
    print(f"Network visualization saved to {args.output}.{args.format}")


if __name__ == '__main__':
    main()
