"""Command line entry point.

Usage:
    python -m chip8 roms/pong.ch8
    python -m chip8 roms/pong.ch8 --scale 15 --cpu-hz 700
    python -m chip8 roms/test_opcode.ch8 --headless 120
"""

import argparse
import logging
import random
import sys
from pathlib import Path

from .config import Config, FAULT_POLICIES
from .constants import CPU_HZ, TIMER_HZ
from .errors import ImageTooLargeError
from .log import set_logs
from .machine import Machine
from .runner import Runner

logger = logging.getLogger("chip8")


def load_rom(path):
    return Path(path).read_bytes()


def build_parser():
    parser = argparse.ArgumentParser(
        prog="chip8",
        description="CHIP-8 emulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Keypad layout:
    1 2 3 C        1 2 3 4
    4 5 6 D   <-   Q W E R
    7 8 9 E        A S D F
    A 0 B F        Z X C V

F1 toggles instruction logs, ESC quits.
        """
    )
    parser.add_argument("rom", help="Path to a CHIP-8 program image (.ch8)")
    parser.add_argument("--scale", "-s", type=int, default=10,
                        help="Window pixels per CHIP-8 pixel. Default: 10")
    parser.add_argument("--cpu-hz", type=float, default=CPU_HZ,
                        help=f"Instructions per second. Default: {CPU_HZ}")
    parser.add_argument("--timer-hz", type=float, default=TIMER_HZ,
                        help=f"Timer and frame rate. Default: {TIMER_HZ}")
    parser.add_argument("--on-fault", choices=FAULT_POLICIES, default="halt",
                        help="What to do on an invalid opcode or bad access. Default: halt")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the RND instruction")
    parser.add_argument("--headless", type=int, metavar="FRAMES", default=None,
                        help="Run FRAMES frames without a window and print the screen")
    parser.add_argument("--no-hud", action="store_true",
                        help="Hide the FPS / cycles counters")
    parser.add_argument("--trace", action="store_true",
                        help="Log every executed instruction (toggle with F1)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose debug logging")
    return parser


def run_headless(machine, config, frames):
    runner = Runner(machine, config)
    cycles = runner.run(frames)
    print(machine.display.to_text())
    logger.info("ran %d frames, %d cycles", runner.frames, cycles)
    if runner.halted:
        logger.error("emulation halted: %s", runner.fault)
        return 1
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose or args.trace else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = Config.from_args(args)
    except ValueError as e:
        parser.error(str(e))

    logger.info("Loading ROM: %s", args.rom)
    try:
        rom = load_rom(args.rom)
        machine = Machine(rom, rng=random.Random(config.seed))
    except (OSError, ImageTooLargeError) as e:
        logger.error("cannot load %s: %s", args.rom, e)
        return 2
    logger.debug("program is %d bytes", len(rom))

    set_logs(config.logs)

    if args.headless is not None:
        return run_headless(machine, config, args.headless)

    # pyglet opens a display on import of its window module
    from .frontend import run_window
    return run_window(machine, config, caption=f"CHIP-8 Emulator - {Path(args.rom).name}")


if __name__ == "__main__":
    sys.exit(main())
