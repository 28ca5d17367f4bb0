#!/usr/bin/env python3
"""
GPIO Monitor - Manual Hardware Script

Exports one input channel and prints every level change for a while.
Must be run on a Raspberry Pi (as root or a member of the gpio group) to
see real changes; elsewhere it runs against the mock filesystem.

Usage:
    python scripts/gpio_monitor.py                       # Physical pin 11, 30s
    python scripts/gpio_monitor.py --channel 17 --mode virtual
    python scripts/gpio_monitor.py --edge rising --duration 60
    python scripts/gpio_monitor.py --mock                # No hardware needed
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gpio import GPIOError, GPIOEvent, GPIOFactory, PinDirection  # noqa: E402

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Console logging for interactive use"""
    level = logging.DEBUG if verbose else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s | %(name)s"))
    root_logger.addHandler(console_handler)


def monitor(args) -> int:
    gpio = GPIOFactory.create_manager(
        mode="mock" if args.mock else "auto",
        numbering=args.mode,
    )

    with gpio:
        logger.info("=" * 60)
        logger.info("GPIO MONITOR")
        logger.info("=" * 60)

        try:
            board = gpio.board
            fallback = " (unrecognized, using fallback pin map)" if board.is_fallback else ""
            logger.info(f"Board revision: {board.revision}{fallback}")
            logger.info(f"Pin map: {board.variant.value}")
        except GPIOError as e:
            logger.warning(f"Board detection failed: {e}")

        change_count = [0]

        def on_change(channel, state):
            change_count[0] += 1
            timestamp = time.strftime("%H:%M:%S")
            print(f"  [{timestamp}] channel {channel} -> {state.name} (total: {change_count[0]})")

        gpio.on(GPIOEvent.CHANGE, on_change)

        try:
            gpio.setup(args.channel, PinDirection.IN, edge=args.edge).result(timeout=5)
        except GPIOError as e:
            logger.error(f"Cannot set up channel {args.channel}: {e}")
            return 1

        initial = gpio.read(args.channel).result(timeout=5)
        logger.info(
            f"Watching channel {args.channel} ({args.mode}) for {args.duration}s, "
            f"initial level {initial.name}",
        )

        start_time = time.time()
        try:
            while time.time() - start_time < args.duration:
                time.sleep(0.5)
        except KeyboardInterrupt:
            print("\n  Monitoring interrupted")

        logger.info(f"{change_count[0]} change(s) observed")

        if change_count[0] == 0:
            logger.warning("No changes detected - check wiring and edge setting")

    logger.info("Channel released")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Watch one GPIO input through sysfs and print its changes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--channel",
        type=int,
        default=11,
        help="Channel to watch in the selected numbering (default: 11)",
    )
    parser.add_argument(
        "--mode",
        choices=["physical", "virtual"],
        default="physical",
        help="Channel numbering (default: physical)",
    )
    parser.add_argument(
        "--edge",
        choices=["none", "rising", "falling", "both"],
        default="both",
        help="Kernel edge detection (default: both)",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=30.0,
        help="Seconds to watch (default: 30)",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use the mock filesystem even on a Raspberry Pi",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    args = parser.parse_args()
    setup_logging(args.verbose)

    return monitor(args)


if __name__ == "__main__":
    sys.exit(main())
